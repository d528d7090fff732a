"""Prompt analysis and ranking endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.v1.schemas.common import ErrorResponse
from src.api.v1.schemas.optimize import PromptRequest, RankResponse
from src.config import settings
from src.core.intent.models import AnalysisResult
from src.core.optimizer import PromptOptimizer
from src.dependencies import get_optimizer
from src.utils.exceptions import InvalidPromptError
from src.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


def check_prompt_size(prompt: str) -> None:
    if len(prompt) > settings.max_prompt_chars:
        raise InvalidPromptError(
            f"prompt is {len(prompt)} characters; the limit is {settings.max_prompt_chars}"
        )


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={422: {"model": ErrorResponse, "description": "Prompt too large"}},
    summary="Analyse a prompt",
    description=(
        "Normalize the prompt and extract its intent.  Empty prompts and bare "
        "'Label:' templates return a sentinel message instead of an intent."
    ),
)
async def analyze_prompt(
    request: PromptRequest,
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> AnalysisResult:
    check_prompt_size(request.prompt)
    return await optimizer.analyze(request.prompt)


@router.post(
    "/rank",
    response_model=RankResponse,
    responses={422: {"model": ErrorResponse, "description": "Prompt too large"}},
    summary="Rank all frameworks for a prompt",
)
async def rank_frameworks(
    request: PromptRequest,
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> RankResponse:
    check_prompt_size(request.prompt)
    entries = await optimizer.rank(request.prompt)
    logger.info("rank_request_served", top=entries[0].framework, count=len(entries))
    return RankResponse(entries=entries, count=len(entries), top=entries[0].framework)
