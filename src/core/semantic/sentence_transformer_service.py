"""Local embedding backend built on sentence-transformers.

The model is loaded lazily on the first :meth:`init` call, in a worker
thread so the event loop stays responsive while weights are read from disk.
"""

from __future__ import annotations

import asyncio

import numpy as np

from src.core.semantic.base import EmbeddingSemanticService
from src.utils.exceptions import SemanticServiceError
from src.utils.logging import get_logger

logger = get_logger("semantic.sentence_transformers")


class SentenceTransformerService(EmbeddingSemanticService):
    """Semantic service backed by a local ``SentenceTransformer`` model.

    Parameters
    ----------
    model:
        Hugging Face model id, e.g. ``"sentence-transformers/all-MiniLM-L6-v2"``.
    device:
        Torch device string; ``None`` lets sentence-transformers choose.
    """

    backend = "sentence_transformers"

    def __init__(self, model: str, device: str | None = None):
        super().__init__(model)
        self.device = device
        self._model = None

    async def _load(self) -> None:
        self._model = await asyncio.to_thread(self._load_model)

    def _load_model(self):
        try:
            from sentence_transformers import SentenceTransformer
        except ImportError as exc:
            raise SemanticServiceError(
                self.backend,
                "The 'sentence-transformers' package is required. "
                "Install it with: pip install '.[semantic]'",
            ) from exc

        logger.info("loading_model", model=self.model, device=self.device or "auto")
        return SentenceTransformer(self.model, device=self.device)

    async def _unload(self) -> None:
        self._model = None

    async def _encode(self, texts: list[str]) -> np.ndarray:
        model = self._model
        if model is None:
            raise SemanticServiceError(self.backend, "model is not loaded")
        vectors = await asyncio.to_thread(model.encode, texts, normalize_embeddings=True)
        return np.asarray(vectors, dtype=float)
