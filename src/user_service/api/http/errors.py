"""Translate exceptions into the JSON error envelope.

Every error response has the shape
``{success, error, message, timestamp, path, statusCode}``.
"""

from datetime import UTC, datetime
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

from src.user_service.core.exceptions import (
    ConflictError,
    InvalidArgumentError,
    NotFoundError,
    UserServiceError,
)

_STATUS_BY_ERROR: dict[type[UserServiceError], int] = {
    NotFoundError: 404,
    ConflictError: 409,
    InvalidArgumentError: 400,
}


def error_envelope(request: Request, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "error": HTTPStatus(status_code).phrase,
            "message": message,
            "timestamp": datetime.now(UTC).isoformat(),
            "path": request.url.path,
            "statusCode": status_code,
        },
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return ", ".join(messages)


async def user_service_error_handler(request: Request, exc: UserServiceError) -> JSONResponse:
    status_code = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.bind(status_code=status_code, error_type=type(exc).__name__).info(
        "request.rejected: {}", exc.message
    )
    return error_envelope(request, status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _format_validation_errors(exc)
    logger.bind(status_code=400, error_type=type(exc).__name__).info(
        "request.validation_error: {}", message
    )
    return error_envelope(request, 400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_envelope(request, exc.status_code, str(exc.detail))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserServiceError, user_service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
