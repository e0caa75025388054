"""Main Litestar application for mongoscope.

This module provides the application factory and the configured app instance
used by ``litestar run`` and uvicorn.
"""

from __future__ import annotations

from litestar import Litestar

from mongoscope import __version__
from mongoscope.cli import MongoscopeCLIPlugin
from mongoscope.core.config import MongoscopeSettings
from mongoscope.core.error_handling import get_exception_handlers
from mongoscope.core.logging import configure_logging, get_middleware
from mongoscope.core.openapi import get_openapi_config
from mongoscope.plugin import MongoscopeConfig, MongoscopePlugin
from mongoscope.web.health import HealthController


def create_app(
    config: MongoscopeConfig | None = None,
    *,
    debug: bool = False,
    json_logs: bool = False,
) -> Litestar:
    """Create and configure the Litestar application.

    Args:
        config: Plugin configuration carrying the session and connection
            registries populated at login.
        debug: Whether to enable debug mode.
        json_logs: Whether to output logs as JSON (for production).

    Returns:
        Configured Litestar application instance.
    """
    configure_logging(debug=debug, json_logs=json_logs)

    return Litestar(
        route_handlers=[HealthController],
        plugins=[MongoscopePlugin(config), MongoscopeCLIPlugin()],
        debug=debug,
        middleware=get_middleware(),
        exception_handlers=get_exception_handlers(),
        openapi_config=get_openapi_config(__version__),
    )


_settings = MongoscopeSettings()
app = create_app(debug=_settings.debug, json_logs=_settings.json_logs)
