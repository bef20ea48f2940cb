# core/errors.py
"""
Domain error taxonomy and the handlers that render it as JSON.

Services raise these exceptions; the handlers registered in `main.py` turn every
failure into a `{"message": ...}` body with the matching status code.
"""
import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("app.errors")


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error."
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request."


class AuthenticationError(AppError):
    """No usable credential was presented."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required."
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentialsError(AuthenticationError):
    """Login identifier/password pair did not match."""
    default_message = "Invalid credentials."


class InvalidTokenError(AppError):
    """A bearer token was presented but is malformed, expired or forged."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden: Invalid or expired token."


class NotFoundError(AppError):
    """
    Resource is absent OR belongs to someone else.

    The caller cannot tell the two cases apart.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class ConflictError(AppError):
    """Uniqueness violation, e.g. a taken username or email."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists."


def error_response(
    status_code: int,
    message: str,
    details: Any | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    payload: dict[str, Any] = {"message": message}
    if details is not None:
        payload["details"] = details
    return JSONResponse(payload, status_code=status_code, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    message = detail if isinstance(detail, str) else "Request failed."
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request payload.",
        details=jsonable_encoder(exc.errors()),
    )


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Log the real cause; the client only ever sees a generic message.
    logger.error(
        "store.error",
        exc_info=exc,
        extra={"extra_data": {"method": request.method, "path": request.url.path}},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled.error",
        exc_info=exc,
        extra={"extra_data": {"method": request.method, "path": request.url.path}},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error.")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    # Anything else, e.g. a driver OSError while connecting
    app.add_exception_handler(Exception, unhandled_error_handler)
