"""
Error taxonomy and secure error handling

Services raise the exceptions defined here; the handlers registered by
`register_error_handlers` turn them into `{"error": "..."}` JSON responses.
Unexpected persistence faults are logged in full server-side and returned to
the client without internals.
"""

import logging
import uuid
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """Malformed or missing input. Nothing is written."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "invalid request"


class Unauthorized(BlogApiError):
    """No identity could be established for the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "invalid token"


class MissingToken(Unauthorized):
    pass


class InvalidToken(Unauthorized):
    pass


class InvalidCredentials(Unauthorized):
    default_message = "invalid username or password"


class Forbidden(BlogApiError):
    """Valid identity, but not allowed to touch the resource."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "forbidden"


class NotFound(BlogApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "not found"


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Log full error details server-side and return sanitized message for client.

    Args:
        error: The exception that occurred
        context: Description of what operation failed (e.g., "GET /posts")
        user_message: Optional custom message to show user. If None, uses generic message.

    Returns:
        Tuple of (sanitized_message, error_id) for client response
    """
    # Generate unique error ID for correlation
    error_id = str(uuid.uuid4())[:8]

    # Log full error server-side
    logger.error(
        f"{context} failed [{error_id}]: {type(error).__name__}: {str(error)}",
        exc_info=error
    )

    # Return sanitized message for client
    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"

    return sanitized, error_id


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        # Drop the "body"/"path" prefix, clients only care about the field
        location = ".".join(str(part) for part in err.get("loc", ())[1:])
        messages.append(f"{location}: {err.get('msg')}" if location else err.get("msg"))
    return "; ".join(messages) or "invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Map the error taxonomy onto HTTP responses."""

    @app.exception_handler(BlogApiError)
    async def handle_blog_api_error(request: Request, exc: BlogApiError) -> JSONResponse:
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        message, _ = log_and_sanitize_error(exc, f"{request.method} {request.url.path}")
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)
