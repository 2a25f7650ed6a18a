"""FastAPI application factory."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..container import Container, get_container
from ..services.visits import VisitCounter
from .routes import router

logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed input is a client error with the same body as any other 400."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    logger.info("Request validation failed", extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Invalid request: {details}" if details else "Invalid request"},
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Unexpected server error"},
    )


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the API around a DI container.

    Args:
        container: Container providing the services; the default
            production container when omitted.

    Returns:
        The FastAPI application.
    """
    app = FastAPI(title="OptiRide", summary="Ride-hailing fare comparison")
    app.state.container = container or get_container()
    app.state.visits = VisitCounter()

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
    app.include_router(router)
    return app
