import io
import os

from plantcare.config import settings


def _upload(client, content=b"\xff\xd8\xff\xe0 not really a jpeg", filename="leaf.jpg", content_type="image/jpeg"):
    return client.post(
        "/api/scan/analyze",
        files={"image": (filename, io.BytesIO(content), content_type)}
    )


def test_analyze_returns_diagnosis(client):
    response = _upload(client)
    assert response.status_code == 200

    data = response.json()
    assert data["success"] is True
    assert data["imageUrl"].startswith("/uploads/")
    assert data["imageUrl"].endswith(".jpg")
    assert set(data) == {"success", "imageUrl", "disease", "recommendations", "severity", "isHealthy"}
    assert 0.5 <= data["disease"]["confidence"] <= 0.99
    assert "scientificName" in data["disease"]
    assert data["severity"] in ("none", "low", "medium", "high")


def test_uploaded_image_is_served(client):
    content = b"\x89PNG\r\n\x1a\n fake png"
    data = _upload(client, content=content, filename="leaf.png", content_type="image/png").json()

    stored = os.path.join(settings.UPLOAD_DIR, os.path.basename(data["imageUrl"]))
    assert os.path.exists(stored)

    served = client.get(data["imageUrl"])
    assert served.status_code == 200
    assert served.content == content


def test_filename_is_not_trusted(client):
    data = _upload(client, filename="../../etc/passwd.jpg").json()
    name = os.path.basename(data["imageUrl"])
    assert ".." not in name
    assert os.path.exists(os.path.join(settings.UPLOAD_DIR, name))


def test_analyze_without_image(client):
    response = client.post("/api/scan/analyze", files={"other": ("x.txt", io.BytesIO(b"x"), "text/plain")})
    assert response.status_code == 400
    assert response.json()["detail"] == "No image provided"


def test_analyze_rejects_non_image(client):
    response = _upload(client, content=b"%PDF-1.4", filename="doc.pdf", content_type="application/pdf")
    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed"


def test_analyze_rejects_oversized_image(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 1024 * 1024)
    before = set(os.listdir(settings.UPLOAD_DIR))

    response = _upload(client, content=b"0" * (1024 * 1024 + 1))

    assert response.status_code == 400
    assert response.json()["detail"] == "Image size should be less than 1MB"
    assert set(os.listdir(settings.UPLOAD_DIR)) == before


def test_history_is_empty(client):
    response = client.get("/api/scan/history")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["scans"] == []
