"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bildval.api.game import router as game_router
from bildval.api.scores import router as scores_router
from bildval.api.words import router as words_router
from bildval.app_logging import configure_logging
from bildval.containers import AppContainer
from bildval.domain.errors import (
    BildvalError,
    InsufficientCatalogError,
    InvalidModeError,
    InvalidSelectionError,
    SessionNotFoundError,
)

_ERROR_STATUS: dict[type[BildvalError], int] = {
    InvalidModeError: status.HTTP_400_BAD_REQUEST,
    SessionNotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidSelectionError: status.HTTP_422_UNPROCESSABLE_CONTENT,
    InsufficientCatalogError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Bildval ready",
            extra={
                "entries": len(app.state.container.catalog),
                "environment": app.state.container.settings.environment,
            },
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(words_router)
    app.include_router(game_router)
    app.include_router(scores_router)

    @app.exception_handler(BildvalError)
    async def handle_bildval_error(request: Request, exc: BildvalError) -> JSONResponse:
        status_code = _status_for(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed: %s",
                exc,
                extra={"path": request.url.path},
            )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _status_for(exc: BildvalError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
