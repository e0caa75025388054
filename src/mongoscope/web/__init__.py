"""Web layer for mongoscope."""

from mongoscope.web.health import HealthController
from mongoscope.web.router import create_router
from mongoscope.web.stats_controller import StatsController

__all__ = ["HealthController", "StatsController", "create_router"]
