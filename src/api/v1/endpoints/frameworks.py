"""Framework registry and single-framework rendering endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from src.api.v1.endpoints.optimize import check_prompt_size
from src.api.v1.schemas.common import ErrorResponse
from src.api.v1.schemas.optimize import FrameworkInfo, FrameworkListResponse, PromptRequest
from src.core.frameworks.models import FrameworkOutput
from src.core.frameworks.registry import list_frameworks
from src.core.optimizer import PromptOptimizer
from src.dependencies import get_optimizer

router = APIRouter()


@router.get("/frameworks", response_model=FrameworkListResponse, summary="List frameworks")
async def get_frameworks() -> FrameworkListResponse:
    frameworks = [
        FrameworkInfo(id=d.id, name=d.name, description=d.description, use_case=d.use_case)
        for d in list_frameworks()
    ]
    return FrameworkListResponse(frameworks=frameworks, count=len(frameworks))


@router.post(
    "/frameworks/{framework_id}/apply",
    response_model=FrameworkOutput,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown framework"},
        422: {"model": ErrorResponse, "description": "Prompt too large"},
    },
    summary="Render a prompt with one framework",
)
async def apply_framework(
    framework_id: str,
    request: PromptRequest,
    optimizer: PromptOptimizer = Depends(get_optimizer),
) -> FrameworkOutput:
    check_prompt_size(request.prompt)
    return await optimizer.apply(request.prompt, framework_id)
