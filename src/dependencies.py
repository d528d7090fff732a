"""FastAPI dependency functions for injection into endpoint handlers.

The semantic service is expensive (it may hold model weights), so it is
created once during the app lifespan and stored on ``app.state``.  The
optimizer is a thin stateless wrapper and is built per request.
"""

from __future__ import annotations

from fastapi import Request

from src.config import settings
from src.core.optimizer import PromptOptimizer
from src.core.semantic.base import SemanticService


def get_semantic_service(request: Request) -> SemanticService | None:
    """Return the semantic service stored on ``app.state`` (may be ``None``)."""
    return getattr(request.app.state, "semantic_service", None)


def get_optimizer(request: Request) -> PromptOptimizer:
    """Construct a :class:`PromptOptimizer` wired to the shared semantic service."""
    return PromptOptimizer(
        get_semantic_service(request),
        init_timeout=settings.semantic_init_timeout,
        query_timeout=settings.semantic_query_timeout,
        confidence_threshold=settings.semantic_confidence_threshold,
        framework_timeout=settings.ranking_framework_timeout,
        overall_timeout=settings.ranking_overall_timeout,
    )
