"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from supplement_rewards.api.profile import router as profile_router
from supplement_rewards.api.quiz import router as quiz_router
from supplement_rewards.api.rewards import router as rewards_router
from supplement_rewards.app_logging import configure_logging
from supplement_rewards.containers import AppContainer
from supplement_rewards.domain.errors import (
    InsufficientCoinsError,
    StorageError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Supplement Rewards")
    app.state.container = container

    app.include_router(rewards_router)
    app.include_router(quiz_router)
    app.include_router(profile_router)

    @app.exception_handler(ValidationError)
    async def validation_error(_request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc)},
        )

    @app.exception_handler(InsufficientCoinsError)
    async def insufficient_coins(
        _request: Request, exc: InsufficientCoinsError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "available": exc.available},
        )

    @app.exception_handler(StorageError)
    async def storage_error(_request: Request, exc: StorageError) -> JSONResponse:
        logger.error("Storage failure: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Storage unavailable"},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
