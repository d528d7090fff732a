from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.v1.middleware.error_handler import ErrorHandlerMiddleware
from src.api.v1.middleware.logging_middleware import LoggingMiddleware
from src.api.v1.router import v1_router
from src.config import settings
from src.core.semantic.factory import create_semantic_service
from src.utils.deadline import with_deadline
from src.utils.exceptions import SemanticServiceError
from src.utils.logging import setup_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(debug=settings.debug)
    logger = get_logger("startup")
    logger.info("Starting Prompt Optimizer", version=settings.app_version)

    try:
        service = create_semantic_service(
            settings.semantic_backend,
            settings.semantic_model,
            api_key=settings.semantic_api_key,
            base_url=settings.semantic_base_url or None,
        )
    except SemanticServiceError as exc:
        logger.warning("semantic_service_disabled", error=str(exc))
        service = None

    if service is not None:
        ready = await with_deadline(
            service.init(), settings.semantic_warmup_timeout, False, label="semantic_warmup"
        )
        logger.info("Semantic service warmed up", backend=service.backend, ready=bool(ready))
    app.state.semantic_service = service

    yield

    logger.info("Shutting down")
    if service is not None:
        await service.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        description="Intent extraction and prompt-framework ranking",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Middleware is applied in reverse order -- outermost first.
    # 1. CORS (outermost -- handles preflight before anything else)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # 2. Error handler (catches exceptions from inner layers)
    app.add_middleware(ErrorHandlerMiddleware)
    # 3. Request/response logger (innermost -- logs timing around handler)
    app.add_middleware(LoggingMiddleware)

    app.include_router(v1_router, prefix="/api/v1")

    return app


app = create_app()
