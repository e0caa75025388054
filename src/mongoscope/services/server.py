"""Server scoped statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pymongo.errors import PyMongoError

from mongoscope.auth.guard import resolve_client
from mongoscope.core.error_codes import ErrorCode
from mongoscope.core.serialization import flatten_stats, to_json_safe
from mongoscope.exceptions import MongoscopeError

if TYPE_CHECKING:
    from mongoscope.auth.base import ConnectionLookup

logger = structlog.get_logger(__name__)


class ServerService:
    """Reads ``serverStatus`` through the connection of one user."""

    def __init__(self, user: str, connections: ConnectionLookup) -> None:
        """Initialize the service for ``user``.

        Raises:
            InvalidUserError: If the user has no live connection.
        """
        self._user = user
        self._client = resolve_client(user, connections)

    def _server_status(self) -> dict[str, Any]:
        try:
            return self._client.admin.command("serverStatus")
        except PyMongoError as e:
            logger.warning("serverStatus failed", user=self._user, error=str(e))
            raise MongoscopeError(ErrorCode.GET_SERVER_STATS_EXCEPTION, str(e)) from e

    def get_server_stats(self) -> dict[str, Any]:
        """Run ``serverStatus`` against the admin database.

        Returns:
            The status document as JSON-safe values.

        Raises:
            MongoscopeError: If the driver command fails.
        """
        return to_json_safe(self._server_status())

    def get_server_entries(self) -> list[dict[str, Any]]:
        """Run ``serverStatus`` and flatten it into ``{"Key", "Value", "Type"}`` entries.

        Type names are taken from the driver values, so dates, timestamps and
        64-bit integers keep their BSON names.
        """
        return flatten_stats(self._server_status())
