from fastapi import APIRouter, Depends

from src.config import settings
from src.dependencies import get_semantic_service

router = APIRouter()


@router.get("/health")
async def health_check(service=Depends(get_semantic_service)):
    return {
        "status": "healthy",
        "service": "prompt-optimizer",
        "version": settings.app_version,
        "semantic_backend": service.backend if service is not None else "none",
        "semantic_ready": bool(service is not None and service.is_ready()),
    }
