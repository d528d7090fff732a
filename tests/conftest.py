import asyncio

import numpy as np
import pytest

from src.core.semantic.base import ClassificationResult, EmbeddingResult, SemanticService
from src.utils.exceptions import SemanticServiceError


def _letter_vector(text: str) -> np.ndarray:
    vec = np.zeros(26)
    for ch in text.lower():
        if "a" <= ch <= "z":
            vec[ord(ch) - ord("a")] += 1
    return vec


class FakeSemanticService(SemanticService):
    """In-memory semantic service with configurable latency and failures."""

    backend = "fake"

    def __init__(
        self,
        ready: bool = True,
        delay: float = 0.0,
        fail: bool = False,
        fail_init: bool = False,
        label: str = "content creation",
        score: float = 0.9,
    ):
        self._ready = ready
        self.delay = delay
        self.fail = fail
        self.fail_init = fail_init
        self.label = label
        self.score = score
        self.init_calls = 0
        self.embedded: list[str] = []

    async def init(self) -> bool:
        self.init_calls += 1
        if self.fail_init:
            raise SemanticServiceError(self.backend, "init failed")
        self._ready = True
        return True

    def is_ready(self) -> bool:
        return self._ready

    async def dispose(self) -> None:
        self._ready = False

    async def classify(self, text: str, labels: list[str]) -> ClassificationResult:
        await self._maybe_wait_or_fail()
        return ClassificationResult(label=self.label, score=self.score)

    async def embed(self, text: str) -> EmbeddingResult:
        await self._maybe_wait_or_fail()
        self.embedded.append(text)
        return EmbeddingResult(vector=_letter_vector(text), model="fake")

    async def _maybe_wait_or_fail(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise SemanticServiceError(self.backend, "boom")


@pytest.fixture
def fake_service():
    return FakeSemanticService()


@pytest.fixture
def slow_service():
    """A ready service whose every call outlasts any test deadline."""
    return FakeSemanticService(delay=5.0)


@pytest.fixture
def failing_service():
    return FakeSemanticService(fail=True)


@pytest.fixture
def messy_prompt():
    return "plz wrte abt tech future ai robots and stuff make it gud not boring"


@pytest.fixture
def structured_prompt():
    return "Role: Marketing Manager\nAction: Write\nTopic: Social media strategy for Q4"


@pytest.fixture
def make_service():
    """Factory for services with custom readiness, latency or labels."""
    return FakeSemanticService
