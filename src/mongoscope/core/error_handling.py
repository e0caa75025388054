"""Exception handlers that render failures as mongoscope error envelopes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from mongoscope.core.envelope import ErrorEnvelope
from mongoscope.core.error_codes import ErrorCode, ErrorLevel, status_for

if TYPE_CHECKING:
    from litestar import Request
    from litestar.exceptions import HTTPException

    from mongoscope.exceptions import MongoscopeError

logger = structlog.get_logger(__name__)


def get_correlation_id(request: Request) -> str | None:
    """Extract correlation ID from request state or headers."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def _envelope_response(envelope: ErrorEnvelope, status_code: int) -> Response[dict[str, Any]]:
    return Response(
        content=envelope.to_dict(),
        status_code=status_code,
        media_type="application/json",
    )


def mongoscope_error_handler(request: Request, exc: MongoscopeError) -> Response[dict[str, Any]]:
    """Render a domain error with its own code and level."""
    correlation_id = get_correlation_id(request)
    status_code = status_for(exc.code)

    log_method = logger.error if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
    log_method(
        "Stats request failed",
        correlation_id=correlation_id,
        path=request.url.path,
        error_code=exc.code.value,
        level=exc.level.value,
        error=exc.message,
    )

    envelope = ErrorEnvelope(
        code=exc.code,
        message=exc.message,
        level=exc.level,
        correlation_id=correlation_id,
    )
    return _envelope_response(envelope, status_code)


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Render framework HTTP errors (unknown route, bad method) in the same envelope."""
    correlation_id = get_correlation_id(request)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    logger.warning(
        "HTTP exception",
        correlation_id=correlation_id,
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
    )

    envelope = ErrorEnvelope(
        code=f"HTTP_{exc.status_code}",
        message=message,
        correlation_id=correlation_id,
    )
    return _envelope_response(envelope, exc.status_code)


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle unexpected exceptions with a generic error envelope.

    Logs the full exception but only reports its message to the client.
    """
    correlation_id = get_correlation_id(request)

    logger.exception(
        "Unhandled exception",
        correlation_id=correlation_id,
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )

    envelope = ErrorEnvelope(
        code=ErrorCode.ANY_OTHER_EXCEPTION,
        message=str(exc) or exc.__class__.__name__,
        level=ErrorLevel.ERROR,
        correlation_id=correlation_id,
    )
    return _envelope_response(envelope, HTTP_500_INTERNAL_SERVER_ERROR)


def get_exception_handlers() -> dict:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions.
    """
    from litestar.exceptions import HTTPException

    from mongoscope.exceptions import MongoscopeError

    return {
        MongoscopeError: mongoscope_error_handler,
        HTTPException: http_exception_handler,
        Exception: generic_exception_handler,
    }
