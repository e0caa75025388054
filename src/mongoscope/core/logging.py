"""Structured logging setup and request logging middleware for mongoscope.

Every request gets a correlation ID bound into the structlog context so the
"received"/"completed" lines of a stats handler can be tied together.
"""

from __future__ import annotations

import logging
import time
import uuid
from urllib.parse import parse_qsl, urlencode
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Message, Receive, Scope, Send

CORRELATION_HEADER = b"x-correlation-id"
TOKEN_PARAM = "tokenId"
REDACTED = "***"


def redact_query(query_string: bytes) -> str:
    """Return the query string with the session token replaced by ``***``."""
    params = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
    return urlencode([(key, REDACTED if key == TOKEN_PARAM else value) for key, value in params], safe="*")


def stats_scope(path: str) -> str | None:
    """Name the statistics scope a request path targets.

    Returns:
        ``server``, ``database`` or ``collection`` for the stats routes,
        None for any other path.
    """
    parts = [part for part in path.split("/") if part]
    if "stats" not in parts:
        return None
    rest = parts[parts.index("stats") + 1 :]
    if not rest:
        return "server"
    if len(rest) >= 3 and rest[2] == "collection":
        return "collection"
    return "database"


def configure_logging(*, debug: bool = False, json_logs: bool = False) -> None:
    """Configure structlog for the application.

    Args:
        debug: Enable debug level logging.
        json_logs: Output logs as JSON (for production).
    """
    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json_logs:
        processors.extend(
            [
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(),
            ]
        )
    else:
        processors.extend(
            [
                structlog.processors.ExceptionPrettyPrinter(),
                structlog.dev.ConsoleRenderer(colors=True),
            ]
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


class CorrelationIdMiddleware:
    """Attach a correlation ID to every HTTP request.

    The ID is taken from ``X-Correlation-ID`` or ``X-Request-ID`` when the
    caller sends one, generated otherwise, stored in ``scope["state"]``,
    bound into the structlog context and echoed back as a response header.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process the request and add correlation ID."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        correlation_id = (
            headers.get(CORRELATION_HEADER, b"").decode()
            or headers.get(b"x-request-id", b"").decode()
            or uuid.uuid4().hex
        )

        scope.setdefault("state", {})
        scope["state"]["correlation_id"] = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            path=scope.get("path", ""),
            query=redact_query(scope.get("query_string", b"")),
            method=scope.get("method", ""),
        )

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((CORRELATION_HEADER, correlation_id.encode()))
                message["headers"] = response_headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            structlog.contextvars.clear_contextvars()


class RequestLoggingMiddleware:
    """Log the status code and duration of each HTTP request.

    Requests whose path is in ``exclude_paths`` (health probes by default)
    are passed through without logging.
    """

    def __init__(self, app: ASGIApp, *, exclude_paths: set[str] | None = None) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application.
            exclude_paths: Paths to exclude from logging.
        """
        self.app = app
        self.exclude_paths = exclude_paths or {"/health", "/ready", "/favicon.ico"}

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process the request and log its outcome."""
        if scope["type"] != "http" or scope.get("path", "") in self.exclude_paths:
            await self.app(scope, receive, send)
            return

        logger = structlog.get_logger(__name__)
        start_time = time.perf_counter()
        status_code = 500

        client = scope.get("client")
        client_ip = client[0] if client else "unknown"

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            logger.exception("Request failed with exception", client_ip=client_ip)
            raise
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000

            if status_code >= 500:
                log_method = logger.error
            elif status_code >= 400:
                log_method = logger.warning
            else:
                log_method = logger.info

            log_method(
                "HTTP response sent",
                status_code=status_code,
                duration_ms=round(duration_ms, 2),
                client_ip=client_ip,
                stats_scope=stats_scope(scope.get("path", "")),
            )


def get_middleware() -> list:
    """Return the logging middleware stack, outermost first."""
    return [
        CorrelationIdMiddleware,
        RequestLoggingMiddleware,
    ]
