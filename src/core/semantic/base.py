"""Semantic service interface.

The optimizer treats embedding/classification models as a best-effort
collaborator.  Concrete services own their model lifecycle (lazy load,
idempotent ``init``, ``dispose``) and any caches; callers always wrap their
calls in :func:`src.utils.deadline.with_deadline` and fall back to rule-based
results when a call is slow, fails, or is not confident enough.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import numpy as np

from src.utils.exceptions import SemanticServiceUnavailableError
from src.utils.logging import get_logger

logger = get_logger("semantic")

# Softmax temperature applied to label similarities in ``classify``.
CLASSIFY_TEMPERATURE = 20.0


@dataclass(frozen=True)
class ClassificationResult:
    label: str
    score: float
    scores: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True, eq=False)
class EmbeddingResult:
    vector: np.ndarray
    model: str = ""


def cosine_similarity(a, b) -> float:
    """Cosine similarity of two vectors, clamped to ``[0, 1]``."""
    va = np.asarray(a, dtype=float).ravel()
    vb = np.asarray(b, dtype=float).ravel()
    if va.size == 0 or va.shape != vb.shape:
        return 0.0
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.clip(np.dot(va, vb) / denom, 0.0, 1.0))


class SemanticService(ABC):
    """Async embedding/classification collaborator."""

    backend: str = "base"

    @abstractmethod
    async def init(self) -> bool:
        """Load the model if needed.  Safe to call repeatedly."""
        ...

    @abstractmethod
    def is_ready(self) -> bool:
        ...

    @abstractmethod
    async def dispose(self) -> None:
        ...

    @abstractmethod
    async def classify(self, text: str, labels: list[str]) -> ClassificationResult:
        """Pick the label in *labels* that best describes *text*."""
        ...

    @abstractmethod
    async def embed(self, text: str) -> EmbeddingResult:
        ...

    @staticmethod
    def similarity(a, b) -> float:
        return cosine_similarity(a, b)


class EmbeddingSemanticService(SemanticService):
    """Base for services that classify by label-embedding similarity.

    Subclasses provide :meth:`_load`, :meth:`_unload` and :meth:`_encode`;
    label embeddings are cached for the lifetime of the loaded model.

    Parameters
    ----------
    model:
        Model identifier passed to the backend.
    """

    def __init__(self, model: str):
        self.model = model
        self._ready = False
        self._init_task: asyncio.Task | None = None
        self._label_cache: dict[str, np.ndarray] = {}

    # ----- lifecycle -------------------------------------------------------

    async def init(self) -> bool:
        """Start the model load, or join the one already in flight.

        The load runs as a task owned by the service and is shielded from
        the caller's cancellation, so a caller that gives up on its deadline
        leaves the load running for the next caller to join.  A failed load
        is retried by the next call.
        """
        if self._ready:
            return True
        task = self._init_task
        if task is None or task.done():
            task = asyncio.create_task(self._load_and_mark_ready())
            task.add_done_callback(self._log_init_failure)
            self._init_task = task
        await asyncio.shield(task)
        return self._ready

    def is_ready(self) -> bool:
        return self._ready

    async def dispose(self) -> None:
        task, self._init_task = self._init_task, None
        if task is not None and not task.done():
            task.cancel()
        if not self._ready:
            return
        await self._unload()
        self._label_cache.clear()
        self._ready = False
        logger.info("semantic_service_disposed", backend=self.backend)

    async def _load_and_mark_ready(self) -> None:
        await self._load()
        self._ready = True
        logger.info("semantic_service_ready", backend=self.backend, model=self.model)

    def _log_init_failure(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("semantic_init_failed", backend=self.backend, error=str(exc))

    # ----- operations ------------------------------------------------------

    async def embed(self, text: str) -> EmbeddingResult:
        self._require_ready()
        vectors = await self._encode([text])
        return EmbeddingResult(vector=vectors[0], model=self.model)

    async def classify(self, text: str, labels: list[str]) -> ClassificationResult:
        self._require_ready()
        if not labels:
            raise ValueError("labels must not be empty")

        missing = [label for label in labels if label not in self._label_cache]
        vectors = await self._encode([text, *missing])
        for label, vector in zip(missing, vectors[1:]):
            self._label_cache[label] = vector

        text_vec = vectors[0]
        sims = np.array([cosine_similarity(text_vec, self._label_cache[l]) for l in labels])
        weights = np.exp((sims - sims.max()) * CLASSIFY_TEMPERATURE)
        probs = weights / weights.sum()

        best = int(np.argmax(probs))
        scores = {label: round(float(p), 4) for label, p in zip(labels, probs)}
        return ClassificationResult(label=labels[best], score=float(probs[best]), scores=scores)

    # ----- backend hooks ---------------------------------------------------

    @abstractmethod
    async def _load(self) -> None:
        ...

    async def _unload(self) -> None:
        return None

    @abstractmethod
    async def _encode(self, texts: list[str]) -> np.ndarray:
        """Return a 2-D array with one row per input text."""
        ...

    def _require_ready(self) -> None:
        if not self._ready:
            raise SemanticServiceUnavailableError(self.backend)
