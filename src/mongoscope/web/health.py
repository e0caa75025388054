"""Health check endpoints for mongoscope.

Provides /health and /ready endpoints for container orchestration
and load balancer health checks.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import structlog
from litestar import Controller, get
from pymongo.errors import PyMongoError

from mongoscope import __version__
from mongoscope.auth.base import ConnectionLookup, SessionLookup  # noqa: TC001

if TYPE_CHECKING:
    from pymongo import MongoClient

logger = structlog.get_logger(__name__)


class HealthStatus(str, Enum):
    """Health check status values."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    """Health status of an individual component."""

    name: str
    status: HealthStatus
    message: str | None = None
    latency_ms: float | None = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "latency_ms": self.latency_ms,
        }


@dataclass
class HealthResponse:
    """Health check response."""

    status: HealthStatus
    version: str = __version__
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())
    components: list[ComponentHealth] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "version": self.version,
            "timestamp": self.timestamp,
            "components": [c.to_dict() for c in self.components],
        }


def ping_client(client: MongoClient) -> float:
    """Ping a client and return the round trip in milliseconds.

    Raises:
        PyMongoError: If the server cannot be reached.
    """
    start = time.perf_counter()
    client.admin.command("ping")
    return round((time.perf_counter() - start) * 1000, 2)


def check_connections(connections: ConnectionLookup) -> ComponentHealth:
    """Ping every registered client and summarize the result.

    The component is healthy when every client answers, degraded when only
    some do and unhealthy when none do. ``latency_ms`` is the slowest
    successful ping.
    """
    pairs = connections.items()
    latencies: list[float] = []
    for user, client in pairs:
        try:
            latencies.append(ping_client(client))
        except PyMongoError as e:
            logger.warning("Connection ping failed", user=user, error=str(e))

    if len(latencies) == len(pairs):
        status = HealthStatus.HEALTHY
    elif latencies:
        status = HealthStatus.DEGRADED
    else:
        status = HealthStatus.UNHEALTHY

    return ComponentHealth(
        name="connections",
        status=status,
        message=f"{len(latencies)}/{len(pairs)} connections reachable",
        latency_ms=max(latencies) if latencies else None,
    )


class HealthController(Controller):
    """Liveness and readiness probes.

    Liveness never touches MongoDB; readiness pings every registered client.
    """

    path = ""
    tags: ClassVar[list[str]] = ["Health"]

    @get("/health")
    async def health(self, sessions: SessionLookup, connections: ConnectionLookup) -> dict:
        """Liveness probe endpoint.

        Returns:
            Health status with the number of active sessions and connections.
        """
        components = [
            ComponentHealth(
                name="application",
                status=HealthStatus.HEALTHY,
                message="Application is running",
            ),
            ComponentHealth(
                name="sessions",
                status=HealthStatus.HEALTHY,
                message=f"{len(sessions)} active sessions, {len(connections)} open connections",
            ),
        ]
        return HealthResponse(status=HealthStatus.HEALTHY, components=components).to_dict()

    @get("/ready", sync_to_thread=True)
    def ready(self, connections: ConnectionLookup) -> dict:
        """Readiness probe endpoint.

        Returns:
            Readiness status with individual check results. When clients are
            registered, ``connections`` carries the ping summary.
        """
        checks: dict[str, bool] = {"application": True}
        response: dict = {"timestamp": datetime.now(UTC).isoformat(), "checks": checks}

        if len(connections):
            component = check_connections(connections)
            checks["connections"] = component.status is HealthStatus.HEALTHY
            response["connections"] = component.to_dict()

        response["ready"] = all(checks.values())
        return response
