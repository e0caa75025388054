"""Runtime settings for mongoscope."""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


@dataclass
class MongoscopeSettings:
    """Settings read from the environment.

    Environment variables:
        MONGOSCOPE_DEBUG: Enable debug mode and debug level logging.
        MONGOSCOPE_JSON_LOGS: Render logs as JSON (for production).
        MONGO_URI: Connection string used by the CLI.
        MONGO_SERVER_SELECTION_TIMEOUT_MS: Server selection timeout for CLI clients.
    """

    debug: bool = field(default_factory=lambda: _env_flag("MONGOSCOPE_DEBUG"))
    json_logs: bool = field(default_factory=lambda: _env_flag("MONGOSCOPE_JSON_LOGS"))
    mongo_uri: str = field(default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017"))
    server_selection_timeout_ms: int = field(
        default_factory=lambda: int(os.getenv("MONGO_SERVER_SELECTION_TIMEOUT_MS", "5000"))
    )
