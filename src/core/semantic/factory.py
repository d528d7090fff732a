"""Build the configured semantic service.

Supported backends:

  - ``none`` -- no service; every caller stays on the rule-based path
  - ``sentence_transformers`` -- local model via sentence-transformers
  - ``openai`` -- OpenAI embeddings API
  - ``ollama`` -- Ollama's OpenAI-compatible endpoint on localhost
  - ``openai_compatible`` -- any OpenAI-compatible API with a custom base_url
"""

from __future__ import annotations

from src.core.semantic.base import SemanticService
from src.utils.exceptions import SemanticServiceError

# Well-known OpenAI-compatible backends and their default base URLs.
_KNOWN_COMPATIBLE_BACKENDS: dict[str, str] = {
    "ollama": "http://localhost:11434/v1",
}


def create_semantic_service(
    backend: str,
    model: str,
    api_key: str = "",
    base_url: str | None = None,
) -> SemanticService | None:
    """Instantiate the service for *backend* without loading any model.

    Returns ``None`` for ``"none"``.  Raises :class:`SemanticServiceError` for
    an unknown backend or a compatible backend without a base URL.
    """
    backend = (backend or "none").lower()

    if backend == "none":
        return None

    if backend == "sentence_transformers":
        from src.core.semantic.sentence_transformer_service import SentenceTransformerService

        return SentenceTransformerService(model)

    from src.core.semantic.openai_embedding_service import OpenAIEmbeddingService

    if backend == "openai":
        return OpenAIEmbeddingService(model, api_key, base_url or None, backend_name="openai")

    if backend in _KNOWN_COMPATIBLE_BACKENDS:
        url = base_url or _KNOWN_COMPATIBLE_BACKENDS[backend]
        return OpenAIEmbeddingService(model, api_key, url, backend_name=backend)

    if backend == "openai_compatible":
        if not base_url:
            raise SemanticServiceError(backend, "base_url is required but was empty.")
        return OpenAIEmbeddingService(model, api_key, base_url, backend_name=backend)

    raise SemanticServiceError(backend, "unknown semantic backend")
