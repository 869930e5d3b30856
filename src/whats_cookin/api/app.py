"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from whats_cookin.api.auth import router as auth_router
from whats_cookin.api.calendar import router as calendar_router
from whats_cookin.api.cuisines import router as cuisines_router
from whats_cookin.api.ingredients import router as ingredients_router
from whats_cookin.api.meals import router as meals_router
from whats_cookin.api.shopping_lists import router as shopping_lists_router
from whats_cookin.app_logging import configure_logging
from whats_cookin.containers import AppContainer
from whats_cookin.domain.errors import (
    AccessDeniedError,
    NotFoundError,
    StoreError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
    WhatsCookinError,
)

_STATUS_BY_ERROR: dict[type[WhatsCookinError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AccessDeniedError: status.HTTP_403_FORBIDDEN,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_status(exc: WhatsCookinError) -> int:
    """Return the HTTP status for a domain error, most specific class first."""
    for cls in type(exc).__mro__:
        if cls in _STATUS_BY_ERROR:
            return _STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        same_site="lax",
        https_only=settings.secure_cookies,
    )

    @app.exception_handler(WhatsCookinError)
    async def handle_domain_error(request: Request, exc: WhatsCookinError) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.message, "code": exc.code},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation(exc), "code": ValidationError.code},
        )

    app.include_router(auth_router)
    app.include_router(meals_router)
    app.include_router(ingredients_router)
    app.include_router(calendar_router)
    app.include_router(cuisines_router)
    app.include_router(shopping_lists_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe_validation(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(
        str(part) for part in first.get("loc", ()) if part not in {"body", "query", "path"}
    )
    message = str(first.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
