"""
Exception handlers translating errors into the JSON error body
``{"error": ..., "code": ..., "message": ...}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from s3share.error_handling.errors import ShareError

logger = logging.getLogger("s3share.errors")


def error_response(message: str, status_code: int, error: str = "") -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error or message,
            "code": status_code,
            "message": message,
        },
    )


async def share_error_handler(request: Request, exc: ShareError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} request failed with {exc.error}: {exc.detail}",
            exc_info=exc.__cause__ or exc,
        )
    message = exc.detail if exc.expose_detail else exc.message
    return error_response(message, exc.status_code, exc.error)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = "not found" if exc.status_code == 404 else str(exc.detail).lower()
    return error_response(message, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"{request.method} request failed with an unexpected error: {exc!r}",
        exc_info=exc,
    )
    return error_response("internal error", 500, "internal_error")


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return error_response("invalid request body", 400, "invalid_request")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShareError, share_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
