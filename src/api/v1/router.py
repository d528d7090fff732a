from fastapi import APIRouter

from src.api.v1.endpoints import frameworks, health, optimize

v1_router = APIRouter()
v1_router.include_router(health.router, tags=["health"])
v1_router.include_router(frameworks.router, tags=["frameworks"])
v1_router.include_router(optimize.router, tags=["optimize"])
