"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intake_tracker.api.foods import router as foods_router
from intake_tracker.api.meals import router as meals_router
from intake_tracker.app_logging import configure_logging
from intake_tracker.config import parse_cors_origins
from intake_tracker.containers import AppContainer
from intake_tracker.domain.errors import (
    AuthError,
    FoodNotFoundError,
    ForbiddenError,
    IntakeTrackerError,
    NotFoundError,
    StoreError,
    UpstreamUnavailableError,
    ValidationError,
)

_ERROR_STATUS: list[tuple[type[IntakeTrackerError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (FoodNotFoundError, status.HTTP_404_NOT_FOUND),
    (UpstreamUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.include_router(foods_router)
    app.include_router(meals_router)

    @app.exception_handler(IntakeTrackerError)
    async def handle_domain_error(
        request: Request, exc: IntakeTrackerError
    ) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error(
                "Store failure", extra={"path": request.url.path}, exc_info=exc
            )
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong"
            )
        for error_type, status_code in _ERROR_STATUS:
            if isinstance(exc, error_type):
                if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                    logger.warning(
                        "%s on %s: %s", type(exc).__name__, request.url.path, exc
                    )
                return _error_response(status_code, str(exc))
        logger.error("Unhandled domain error", exc_info=exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong"
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [
            {
                "field": str(error["loc"][-1]) if error["loc"] else "",
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Validation failed", "details": details},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})
