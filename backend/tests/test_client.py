from unittest.mock import MagicMock

import pytest
import requests

from plantcare.client.api import PlantCareClient, ApiError, ClientValidationError
from plantcare.client.cli import main, render_result, confidence_level, sign_in, scan
from plantcare.client.session import ClientSession, LANDING, SIGNUP, SIGNIN, HOME, SCAN, RESULT
from plantcare.models.diagnosis import MOCK_DIAGNOSES

PHONE = "9876543210"


@pytest.fixture
def api(client):
    return PlantCareClient(base_url="http://testserver/api", session=client)


@pytest.fixture
def leaf(tmp_path):
    path = tmp_path / "leaf.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0 leaf")
    return str(path)


# Session guards

def test_guards_when_signed_out():
    session = ClientSession()
    assert session.resolve_route(LANDING) == LANDING
    assert session.resolve_route(SIGNUP) == SIGNUP
    assert session.resolve_route(HOME) == SIGNIN
    assert session.resolve_route(SCAN) == SIGNIN
    assert session.redirect_for(RESULT) == HOME
    assert session.resolve_route(RESULT) == SIGNIN
    assert session.resolve_route("/nowhere") == LANDING


def test_guards_when_signed_in():
    session = ClientSession()
    session.login({"id": "1", "name": "Asha", "phone": PHONE})
    assert session.resolve_route(HOME) == HOME
    assert session.resolve_route(SCAN) == SCAN
    assert session.resolve_route(RESULT) == HOME

    session.record_scan({"disease": {}})
    assert session.resolve_route(RESULT) == RESULT


def test_logout_clears_everything():
    session = ClientSession()
    session.login({"id": "1", "name": "Asha", "phone": PHONE})
    session.record_scan({"disease": {}})
    session.logout()
    assert session.current_user is None
    assert session.last_scan_result is None


# HTTP client against the app

def test_client_signup_flow(api, pending_otp):
    assert api.send_otp(PHONE)["success"] is True
    result = api.signup("Asha", PHONE, pending_otp(PHONE))
    assert result["user"]["name"] == "Asha"


def test_client_surfaces_server_errors(api):
    with pytest.raises(ApiError) as exc_info:
        api.signin(PHONE, "123456")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "OTP not found. Please request a new one."


def test_client_validates_before_sending():
    session = MagicMock()
    api = PlantCareClient(base_url="http://testserver/api", session=session)

    with pytest.raises(ClientValidationError):
        api.send_otp("12345")
    with pytest.raises(ClientValidationError):
        api.signin(PHONE, "123")
    session.request.assert_not_called()


def test_client_rejects_non_image(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("hello")
    with pytest.raises(ClientValidationError):
        PlantCareClient(session=MagicMock()).analyze_image(str(notes))


def test_client_transport_failure_has_no_fallback():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("refused")
    api = PlantCareClient(base_url="http://localhost:1/api", session=session)

    with pytest.raises(ApiError) as exc_info:
        api.send_otp(PHONE)
    assert exc_info.value.status_code is None


def test_client_scan(api, leaf, pending_otp):
    session = ClientSession()
    with pytest.raises(ClientValidationError):
        scan(api, session, leaf)

    sign_in(api, session, PHONE, prompt=lambda _: pending_otp(PHONE))
    result = scan(api, session, leaf)

    assert session.last_scan_result is result
    assert 0.5 <= result["disease"]["confidence"] <= 0.99
    assert api.scan_history()["scans"] == []
    assert api.health()["status"] == "ok"


# CLI

def test_confidence_levels():
    assert confidence_level(0.95) == "Very High"
    assert confidence_level(0.8) == "High"
    assert confidence_level(0.6) == "Medium"
    assert confidence_level(0.2) == "Low"


def test_render_result_hides_severity_for_healthy():
    healthy = render_result(MOCK_DIAGNOSES[4])
    assert "Healthy Plant" in healthy
    assert "Severity" not in healthy

    blight = render_result(MOCK_DIAGNOSES[0])
    assert "Phytophthora infestans" in blight
    assert "Severity: 🔴 High" in blight
    assert "1. Remove and destroy infected plants immediately" in blight


def test_cli_signin(api, pending_otp, capsys, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: pending_otp(PHONE))
    assert main(["signin", "--phone", PHONE], client=api) == 0
    assert "Welcome back, Farmer" in capsys.readouterr().out


def test_cli_scan(api, leaf, pending_otp, capsys, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda _: pending_otp(PHONE))
    assert main(["scan", leaf, "--phone", PHONE], client=api) == 0
    assert "Confidence:" in capsys.readouterr().out


def test_cli_reports_api_errors(api, capsys, monkeypatch):
    monkeypatch.setattr("plantcare.services.otp_service.generate_otp", lambda length: "111111")
    assert main(["signin", "--phone", PHONE, "--otp", "000000"], client=api) == 1
    assert "Invalid OTP" in capsys.readouterr().err


def test_cli_reports_bad_phone(capsys):
    assert main(["signin", "--phone", "123", "--otp", "123456"], client=PlantCareClient(session=MagicMock())) == 2
    assert "10-digit" in capsys.readouterr().err


def test_cli_uses_injected_prompt(api, pending_otp):
    session = ClientSession()
    user = sign_in(api, session, PHONE, prompt=lambda _: pending_otp(PHONE))
    assert user["phone"] == PHONE
    assert session.is_authenticated


def test_client_follows_configured_otp_length(monkeypatch):
    from plantcare.config import settings

    monkeypatch.setattr(settings, "OTP_LENGTH", 4)
    http = MagicMock()
    http.request.return_value.status_code = 200
    http.request.return_value.json.return_value = {"success": True, "user": {"id": "u1"}}
    api = PlantCareClient(base_url="http://testserver/api", session=http)

    api.signin(PHONE, "1234")
    assert http.request.call_args.kwargs["json"] == {"phone": PHONE, "otp": "1234"}

    with pytest.raises(ClientValidationError, match="4-digit"):
        api.signin(PHONE, "123456")
