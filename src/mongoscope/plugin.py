"""Litestar plugin for mongoscope integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import structlog
from litestar.di import Provide
from litestar.plugins import InitPluginProtocol

from mongoscope.auth.base import ConnectionLookup, SessionLookup  # noqa: TC001
from mongoscope.auth.registry import ConnectionRegistry, SessionRegistry
from mongoscope.web.router import create_router

if TYPE_CHECKING:
    from litestar.config.app import AppConfig

logger = structlog.get_logger(__name__)


def close_clients(connections: ConnectionLookup) -> int:
    """Close every client in ``connections`` and return how many were closed."""
    pairs = connections.items()
    for _, client in pairs:
        client.close()
    logger.info("Closed connections on shutdown", count=len(pairs))
    return len(pairs)


@dataclass
class MongoscopeConfig:
    """Configuration for the mongoscope plugin.

    Attributes:
        sessions: Token -> user lookup shared with the login subsystem.
            A fresh empty registry is used when not given.
        connections: User -> client lookup shared with the login subsystem.
            A fresh empty registry is used when not given.
        close_on_shutdown: Close every client in ``connections`` when the
            application shuts down. Off by default, since the login
            subsystem owns the clients.
        base_path: Path the ``/stats`` routes are mounted under.
        sessions_key: Dependency injection key for the session registry.
        connections_key: Dependency injection key for the connection registry.

    Example:
        >>> sessions = SessionRegistry()
        >>> connections = ConnectionRegistry()
        >>> config = MongoscopeConfig(sessions=sessions, connections=connections, base_path="/api")
    """

    sessions: SessionLookup = field(default_factory=SessionRegistry)
    connections: ConnectionLookup = field(default_factory=ConnectionRegistry)
    close_on_shutdown: bool = False
    base_path: str = "/"
    sessions_key: str = "sessions"
    connections_key: str = "connections"


class MongoscopePlugin(InitPluginProtocol):
    """Litestar plugin that mounts the stats routes.

    The plugin registers the session and connection registries as
    dependencies and mounts :class:`~mongoscope.web.StatsController`.
    Handlers receive the registries by injection rather than reading
    module level state, so tests and embedding applications can supply
    their own.

    Example:
        >>> from litestar import Litestar
        >>> from mongoscope import MongoscopeConfig, MongoscopePlugin
        >>>
        >>> app = Litestar(plugins=[MongoscopePlugin(MongoscopeConfig())])
    """

    def __init__(self, config: MongoscopeConfig | None = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Plugin configuration. Defaults to ``MongoscopeConfig()``.
        """
        self._config = config or MongoscopeConfig()

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Register dependencies and mount the stats router.

        Args:
            app_config: The Litestar application configuration object.

        Returns:
            The modified application configuration.
        """
        sessions = self._config.sessions
        connections = self._config.connections

        def provide_sessions() -> SessionLookup:
            return sessions

        def provide_connections() -> ConnectionLookup:
            return connections

        app_config.dependencies[self._config.sessions_key] = Provide(provide_sessions, sync_to_thread=False)
        app_config.dependencies[self._config.connections_key] = Provide(provide_connections, sync_to_thread=False)

        app_config.route_handlers.append(create_router(path=self._config.base_path))
        if self._config.close_on_shutdown:
            app_config.on_shutdown.append(lambda: close_clients(connections))

        return app_config

    @property
    def sessions(self) -> SessionLookup:
        """The session registry served by this plugin."""
        return self._config.sessions

    @property
    def connections(self) -> ConnectionLookup:
        """The connection registry served by this plugin."""
        return self._config.connections
