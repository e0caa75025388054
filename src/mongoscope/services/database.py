"""Database scoped statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pymongo.errors import PyMongoError

from mongoscope.auth.guard import resolve_client
from mongoscope.core.error_codes import ErrorCode
from mongoscope.core.serialization import flatten_stats
from mongoscope.exceptions import DatabaseError, ValidationError

if TYPE_CHECKING:
    from mongoscope.auth.base import ConnectionLookup

logger = structlog.get_logger(__name__)


class DatabaseService:
    """Database statistics for one user's connection.

    A service is created per request; it resolves the user's client once
    and then issues a single ``dbStats`` command.
    """

    def __init__(self, user: str, connections: ConnectionLookup) -> None:
        """Initialize the service for ``user``.

        Args:
            user: The user key resolved from the session token.
            connections: Lookup of live clients by user.

        Raises:
            InvalidUserError: If the user has no live connection.
        """
        self._user = user
        self._client = resolve_client(user, connections)

    def get_db_stats(self, db_name: str) -> list[dict[str, Any]]:
        """Get the statistics of a database.

        Args:
            db_name: Name of the database.

        Returns:
            One ``{"Key", "Value", "Type"}`` entry per field of ``dbStats``.

        Raises:
            ValidationError: If the name is empty.
            DatabaseError: If the database does not exist or the command fails.
        """
        if not db_name or not db_name.strip():
            raise ValidationError(ErrorCode.DB_NAME_EMPTY, "Database name is empty")

        try:
            if db_name not in self._client.list_database_names():
                raise DatabaseError(
                    ErrorCode.UNDEFINED_DATABASE,
                    f"Database with name [{db_name}] does not exist",
                    db_name=db_name,
                )
            stats = self._client[db_name].command("dbStats")
        except PyMongoError as e:
            logger.warning("dbStats failed", user=self._user, db_name=db_name, error=str(e))
            raise DatabaseError(ErrorCode.GET_DB_STATS_EXCEPTION, str(e), db_name=db_name) from e

        return flatten_stats(stats)
