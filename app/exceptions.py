# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure, whatever its origin, leaves the server as one JSON error
# envelope: {"success": false, "error": "...", "message": "..."}.
#
# - MissingFieldError: required input missing (400, upstream never called)
# - UpstreamRequestError: Sendbird call failed (status/detail from upstream)
# - EndpointNotFoundError: no route matched (404)
# - anything else: 500 with a fixed message, details only in the log
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.models.envelope import ErrorEnvelope, NotFoundEnvelope
from lib.sendbird_client import SendbirdClientError

logger = logging.getLogger(__name__)


# Advertised in every 404 response
AVAILABLE_ENDPOINTS = [
    "GET /health",
    "GET /api/users/:userId/token",
    "POST /api/users",
    "GET /api-docs",
]


class SendbirdServerException(Exception):
    """
    Base exception for the API.

    All custom exceptions inherit from this class and render
    themselves as an error envelope.
    """

    def __init__(
        self,
        error: str,
        message: str,
        status_code: int = 500,
    ):
        super().__init__(error)
        self.error = error
        self.message = message
        self.status_code = status_code

    def to_envelope(self) -> ErrorEnvelope:
        """Convert exception to the API error envelope."""
        return ErrorEnvelope(error=self.error, message=self.message)


# =============================================================================
# Request Exceptions
# =============================================================================

class MissingFieldError(SendbirdServerException):
    """Raised when a required field is missing or empty."""

    def __init__(self, error: str, message: str):
        super().__init__(error=error, message=message, status_code=400)


class EndpointNotFoundError(SendbirdServerException):
    """Raised when no route matches the request."""

    def __init__(self, path: str):
        super().__init__(
            error="Endpoint not found",
            message=f"The requested endpoint {path} does not exist",
            status_code=404,
        )

    def to_envelope(self) -> NotFoundEnvelope:
        return NotFoundEnvelope(
            error=self.error,
            message=self.message,
            availableEndpoints=AVAILABLE_ENDPOINTS,
        )


# =============================================================================
# Upstream Exceptions
# =============================================================================

class UpstreamRequestError(SendbirdServerException):
    """
    Raised when a Sendbird call fails.

    The status code is Sendbird's when it answered, else 500. The error
    text is Sendbird's own message when its body carried one, else the
    client error's message.
    """

    def __init__(self, client_error: SendbirdClientError, message: str):
        super().__init__(
            error=client_error.detail or client_error.message,
            message=message,
            status_code=client_error.status_code or 500,
        )
        self.client_error = client_error


# =============================================================================
# Exception Handlers
# =============================================================================

def original_url(request: Request) -> str:
    """The request path as the client sent it (still percent-encoded), plus query."""
    raw_path = request.scope.get("raw_path")
    if raw_path:
        path = raw_path.split(b"?", 1)[0].decode("latin-1")
    else:
        path = request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _envelope_response(status_code: int, envelope: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


def internal_error_response() -> JSONResponse:
    """The fixed 500 envelope. Never carries internal detail."""
    return _envelope_response(
        500,
        ErrorEnvelope(
            error="Internal server error",
            message="Something went wrong on the server",
        ),
    )


async def sendbird_server_exception_handler(
    request: Request,
    exc: SendbirdServerException
) -> JSONResponse:
    """Convert SendbirdServerException to its JSON envelope."""
    return _envelope_response(exc.status_code, exc.to_envelope())


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle framework HTTP errors.

    Unmatched routes (404) and known paths hit with an unsupported
    method (405) both get the "Endpoint not found" envelope.
    """
    if exc.status_code in (404, 405):
        not_found = EndpointNotFoundError(original_url(request))
        return _envelope_response(not_found.status_code, not_found.to_envelope())

    return _envelope_response(
        exc.status_code,
        ErrorEnvelope(error=str(exc.detail), message="Request could not be processed"),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle unparseable or wrongly-typed request bodies.

    These are reported as internal errors, the same as any other failure
    outside the two Sendbird operations.
    """
    logger.error(f"Invalid request to {request.url.path}: {exc.errors()}")
    return internal_error_response()


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error: {exc}")
    return internal_error_response()
