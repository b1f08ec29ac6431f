"""Exception handlers translating errors to the error envelope."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from flow.domain.error import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    PrincipalKindError,
    ValidationError,
)
from flow.interface.api.envelope import ErrorResponse
from flow.interface.error import MissingRefreshTokenError

logger = logging.getLogger(__name__)

# Most specific first
_DOMAIN_STATUS: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (PrincipalKindError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
]


def error_response(status_code: int, message: str) -> JSONResponse:
    """Build an error envelope response."""
    body = ErrorResponse(status_code=status_code, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error."""
    for error_type, status_code in _DOMAIN_STATUS:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= status.HTTP_403_FORBIDDEN:
        logger.info(
            f"{request.method} {request.url.path} -> {status_code}: {exc}"
        )
    return error_response(status_code, str(exc))


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid {location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request."
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def handle_missing_refresh_token(request: Request, exc: Exception) -> JSONResponse:
    return error_response(status.HTTP_401_UNAUTHORIZED, "Refresh token is required.")


async def handle_integrity_error(request: Request, exc: Exception) -> JSONResponse:
    # Unique constraint raced past an application-level check
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc}")
    return error_response(status.HTTP_409_CONFLICT, "Resource already exists.")


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error."
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install every exception handler on ``app``."""
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(MissingRefreshTokenError, handle_missing_refresh_token)
    app.add_exception_handler(IntegrityError, handle_integrity_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
