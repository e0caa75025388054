"""Router configuration for the mongoscope API."""

from __future__ import annotations

from litestar import Router

from mongoscope.web.stats_controller import StatsController


def create_router(path: str = "/") -> Router:
    """Create the mongoscope stats router.

    Args:
        path: Base path the ``/stats`` routes are mounted under. Defaults to
            the application root.

    Returns:
        A configured Litestar Router instance.

    Example:
        >>> router = create_router("/api")
        >>> # Serves /api/stats, /api/stats/db/{db_name}, ...
    """
    return Router(path=path, route_handlers=[StatsController])
