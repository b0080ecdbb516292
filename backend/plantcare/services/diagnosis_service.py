"""
Mock Diagnosis Service

Stand-in for a real plant disease model: waits a moment, then returns one of
a few canned results. The uploaded image is never inspected.
"""
import asyncio
import copy
import logging
import random
from typing import Optional, Sequence

from ..models.diagnosis import MOCK_DIAGNOSES

logger = logging.getLogger(__name__)

MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.99


def jitter_confidence(confidence: float, width: float, rng: random.Random) -> float:
    """Shift confidence by up to +/- width/2, clamped to [0.5, 0.99]"""
    varied = confidence + (rng.random() - 0.5) * width
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, varied))


class MockDiagnosisService:
    def __init__(
        self,
        results: Sequence[dict] = MOCK_DIAGNOSES,
        delay_seconds: float = 1.5,
        jitter: float = 0.1,
        rng: Optional[random.Random] = None
    ):
        if not results:
            raise ValueError("At least one mock result is required")
        self.results = results
        self.delay_seconds = delay_seconds
        self.jitter = jitter
        self.rng = rng or random.Random()

    def pick(self) -> dict:
        """Choose a result uniformly at random and return a jittered copy"""
        result = copy.deepcopy(self.rng.choice(self.results))
        result["disease"]["confidence"] = jitter_confidence(
            result["disease"]["confidence"], self.jitter, self.rng
        )
        return result

    async def analyze(self, image_path: str) -> dict:
        logger.info(f"🌿 Analyzing image: {image_path}")

        # Simulated processing time
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        result = self.pick()
        logger.info(
            f"Diagnosis for {image_path}: {result['disease']['name']} "
            f"({result['disease']['confidence']:.2f})"
        )
        return result
