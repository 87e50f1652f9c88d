"""Error responses.

Every error leaves the API as ``{"code": ..., "message": ..., "details": ...}``
with ``details`` omitted when there is nothing to add.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError as FastAPIValidationError
from fastapi.responses import JSONResponse

from framebrew.core.exceptions import FrameBrewError
from framebrew.core.logging import get_logger

logger = get_logger(__name__)


def error_body(code: str, message: str, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message}
    if details:
        body["details"] = jsonable_encoder(details)
    return body


async def handle_framebrew_error(request: Request, exc: FrameBrewError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request failed",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        **exc.to_dict(),
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, str(exc), exc.context),
    )


async def handle_validation_error(request: Request, exc: FastAPIValidationError) -> JSONResponse:
    logger.info("Request validation failed", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content=error_body("VALIDATION_ERROR", "Invalid input data", exc.errors()),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content=error_body("INTERNAL_ERROR", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FrameBrewError, handle_framebrew_error)
    app.add_exception_handler(FastAPIValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "error_body",
    "register_exception_handlers",
]
