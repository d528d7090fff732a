"""Embedding backend for OpenAI and OpenAI-compatible ``/embeddings`` APIs.

Works with OpenAI itself and with local servers that expose the same
endpoint (Ollama, vLLM, LM Studio).
"""

from __future__ import annotations

import numpy as np

from src.core.semantic.base import EmbeddingSemanticService
from src.utils.exceptions import SemanticServiceError
from src.utils.logging import get_logger

logger = get_logger("semantic.openai")


class OpenAIEmbeddingService(EmbeddingSemanticService):
    """Semantic service backed by an OpenAI-style embeddings endpoint.

    Parameters
    ----------
    model:
        Embedding model id (e.g. ``"text-embedding-3-small"``, ``"nomic-embed-text"``).
    api_key:
        API key; services such as local Ollama accept any value.
    base_url:
        Optional base URL; ``None`` targets api.openai.com.
    backend_name:
        Name used in log events and errors.
    """

    def __init__(
        self,
        model: str,
        api_key: str = "",
        base_url: str | None = None,
        backend_name: str = "openai",
    ):
        super().__init__(model)
        self.api_key = api_key
        self.base_url = base_url
        self.backend = backend_name
        self._client = None

    async def _load(self) -> None:
        try:
            import openai
        except ImportError as exc:
            raise SemanticServiceError(
                self.backend,
                "The 'openai' package is required. Install it with: pip install openai",
            ) from exc

        client = openai.AsyncOpenAI(api_key=self.api_key or "none", base_url=self.base_url)
        try:
            await client.embeddings.create(model=self.model, input=["ping"])
        except Exception as exc:
            await client.close()
            raise SemanticServiceError(self.backend, f"probe request failed: {exc}") from exc
        self._client = client

    async def _unload(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _encode(self, texts: list[str]) -> np.ndarray:
        if self._client is None:
            raise SemanticServiceError(self.backend, "client is not initialised")
        try:
            response = await self._client.embeddings.create(model=self.model, input=texts)
        except Exception as exc:
            logger.warning("embedding_request_failed", backend=self.backend, error=str(exc))
            raise SemanticServiceError(self.backend, str(exc)) from exc
        rows = sorted(response.data, key=lambda item: item.index)
        return np.asarray([row.embedding for row in rows], dtype=float)
