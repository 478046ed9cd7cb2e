"""
Exception handlers.

Every failure leaving a route is mapped here to exactly one status code
and a {"detail": ...} body.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fintrack.core.exceptions import (
    AuthError,
    FinTrackError,
    InvalidTokenError,
    UnauthenticatedError,
    ValidationError,
)
from fintrack.core.logging import get_logger
from fintrack.services.validation import first_error_message

logger = get_logger("fintrack.api.errors")

INTERNAL_ERROR_MESSAGE = "Internal Server Error"

STATUS_BY_ERROR: dict[type[FinTrackError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTokenError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    UnauthenticatedError: status.HTTP_401_UNAUTHORIZED,
}


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first_error_message(exc.errors())},
    )


async def handle_app_error(request: Request, exc: FinTrackError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc))
    if status_code is None:
        return await handle_unexpected_error(request, exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=status_code, content={"detail": exc.message}, headers=headers)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc!r}",
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(FinTrackError, handle_app_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
