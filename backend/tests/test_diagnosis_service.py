import asyncio
import copy
import random

from plantcare.models.diagnosis import MOCK_DIAGNOSES, SEVERITY_LEVELS
from plantcare.services.diagnosis_service import MockDiagnosisService, jitter_confidence


def test_table_has_five_entries():
    assert len(MOCK_DIAGNOSES) == 5
    assert sum(1 for entry in MOCK_DIAGNOSES if entry["isHealthy"]) == 1
    for entry in MOCK_DIAGNOSES:
        assert entry["severity"] in SEVERITY_LEVELS
        assert entry["recommendations"]


def test_confidence_always_within_bounds():
    service = MockDiagnosisService(delay_seconds=0, rng=random.Random(7))
    for _ in range(500):
        confidence = service.pick()["disease"]["confidence"]
        assert 0.5 <= confidence <= 0.99


def test_jitter_is_clamped():
    class Extreme:
        def __init__(self, value):
            self.value = value

        def random(self):
            return self.value

    assert jitter_confidence(0.98, 0.1, Extreme(1.0)) == 0.99
    assert jitter_confidence(0.52, 0.1, Extreme(0.0)) == 0.5
    assert jitter_confidence(0.3, 0.0, Extreme(0.5)) == 0.5


def test_serving_does_not_mutate_table():
    before = copy.deepcopy(MOCK_DIAGNOSES)
    service = MockDiagnosisService(delay_seconds=0)
    for _ in range(50):
        service.pick()
    assert list(MOCK_DIAGNOSES) == list(before)


def test_all_results_reachable():
    service = MockDiagnosisService(delay_seconds=0, rng=random.Random(1))
    names = {service.pick()["disease"]["name"] for _ in range(300)}
    assert names == {entry["disease"]["name"] for entry in MOCK_DIAGNOSES}


def test_analyze_returns_result_shape():
    service = MockDiagnosisService(delay_seconds=0)
    result = asyncio.run(service.analyze("uploads/leaf.jpg"))
    assert set(result) == {"disease", "recommendations", "severity", "isHealthy"}
    assert set(result["disease"]) == {"name", "scientificName", "confidence", "description"}
