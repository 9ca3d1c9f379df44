"""
Exception Handlers

Centralized translation of user errors into HTTP responses with a uniform
error envelope.
"""
import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from roster.modules.users import constants
from roster.modules.users.domain.errors import (
    InternalUserError,
    UserNotFoundError,
    UserValidationError,
)

logger = logging.getLogger("roster.users.errors")

GENERIC_ERROR_MESSAGE = "An internal server error occurred"


class ErrorResponse(BaseModel):
    timestamp: str = Field(default_factory=lambda: datetime.now().strftime(constants.TIMESTAMP_FORMAT))
    status: int
    error: str
    message: str
    path: str


def error_response(request: Request, status: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(status=status, error=error, message=message, path=request.url.path)
    return JSONResponse(status_code=status, content=body.model_dump())


async def handle_user_not_found(request: Request, exc: UserNotFoundError) -> JSONResponse:
    logger.warning(f"[error_handlers.not_found] {exc}")
    return error_response(request, 404, "User Not Found", str(exc))


async def handle_user_validation(request: Request, exc: UserValidationError) -> JSONResponse:
    """Single failures keep the field-scoped message; several are listed together."""
    message = str(exc)
    if len(exc.errors) > 1:
        errors = {error.field: error.message for error in exc.errors}
        message = f"Validation errors in fields: {errors}"
    logger.warning(f"[error_handlers.validation] {message}")
    return error_response(request, 400, "Validation Error", message)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Field-level errors raised by request model parsing."""
    errors = {}
    for error in exc.errors():
        loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
        field = loc[-1] if loc else "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))

    logger.warning(f"[error_handlers.request_validation] errors={errors}")
    return error_response(request, 400, "Validation Failed", f"Validation errors in fields: {errors}")


async def handle_internal(request: Request, exc: InternalUserError) -> JSONResponse:
    logger.error(f"[error_handlers.internal] ERROR: {exc}", exc_info=exc)
    return error_response(request, 500, "Internal Server Error", str(exc))


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"[error_handlers.unexpected] ERROR: {exc}", exc_info=exc)
    return error_response(request, 500, "Internal Server Error", GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UserNotFoundError, handle_user_not_found)
    app.add_exception_handler(UserValidationError, handle_user_validation)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(InternalUserError, handle_internal)
    app.add_exception_handler(Exception, handle_unexpected)
