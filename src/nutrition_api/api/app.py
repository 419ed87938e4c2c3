"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nutrition_api.api.analysis import router as analysis_router
from nutrition_api.api.profile import router as profile_router
from nutrition_api.app_logging import configure_logging
from nutrition_api.config import Settings
from nutrition_api.containers import AppContainer
from nutrition_api.errors import ApiError, RoutingError, UnknownError, ValidationError

CORS_ALLOW_METHODS = "GET, POST, PUT, OPTIONS"
CORS_ALLOW_HEADERS = "Content-Type, Authorization, x-user-id"


def cors_headers(settings: Settings) -> dict[str, str]:
    """Return the cross-origin headers sent with every response."""
    return {
        "Access-Control-Allow-Origin": settings.cors_allow_origin,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
    }


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    headers = cors_headers(container.settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="nutrition-api", lifespan=lifespan)
    app.state.container = container

    @app.middleware("http")
    async def add_cors_headers(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)
        response.headers.update(headers)
        return response

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s (%s)",
                request.method,
                request.url.path,
                exc.error,
                exc.details,
            )
        return JSONResponse(
            exc.to_payload(), status_code=exc.status_code, headers=headers
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        error = RoutingError(exc.status_code, str(exc.detail))
        return JSONResponse(
            error.to_payload(),
            status_code=error.status_code,
            headers={**(exc.headers or {}), **headers},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        error = ValidationError(_describe_validation_errors(exc))
        return JSONResponse(
            error.to_payload(), status_code=error.status_code, headers=headers
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = UnknownError(str(exc) or type(exc).__name__)
        return JSONResponse(
            error.to_payload(), status_code=error.status_code, headers=headers
        )

    app.include_router(analysis_router)
    app.include_router(profile_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI validation errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request body."
