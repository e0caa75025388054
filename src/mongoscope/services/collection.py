"""Collection scoped statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from pymongo.errors import PyMongoError

from mongoscope.auth.guard import resolve_client
from mongoscope.core.error_codes import ErrorCode
from mongoscope.core.serialization import flatten_stats
from mongoscope.exceptions import CollectionError, ValidationError

if TYPE_CHECKING:
    from mongoscope.auth.base import ConnectionLookup

logger = structlog.get_logger(__name__)


class CollectionService:
    """Collection statistics for one user's connection."""

    def __init__(self, user: str, connections: ConnectionLookup) -> None:
        """Initialize the service for ``user``.

        Raises:
            InvalidUserError: If the user has no live connection.
        """
        self._user = user
        self._client = resolve_client(user, connections)

    def get_coll_stats(self, db_name: str, collection_name: str) -> list[dict[str, Any]]:
        """Get the statistics of a collection.

        Args:
            db_name: Name of the database holding the collection.
            collection_name: Name of the collection.

        Returns:
            One ``{"Key", "Value", "Type"}`` entry per field of ``collStats``.

        Raises:
            ValidationError: If either name is empty.
            CollectionError: If the database or collection does not exist,
                or the command fails.
        """
        if not db_name or not db_name.strip():
            raise ValidationError(ErrorCode.DB_NAME_EMPTY, "Database name is empty")
        if not collection_name or not collection_name.strip():
            raise ValidationError(ErrorCode.COLLECTION_NAME_EMPTY, "Collection name is empty")

        try:
            if db_name not in self._client.list_database_names():
                raise CollectionError(
                    ErrorCode.UNDEFINED_DATABASE,
                    f"Database with name [{db_name}] does not exist",
                    db_name=db_name,
                    collection_name=collection_name,
                )
            database = self._client[db_name]
            if collection_name not in database.list_collection_names():
                raise CollectionError(
                    ErrorCode.UNDEFINED_COLLECTION,
                    f"Collection with name [{collection_name}] does not exist in database [{db_name}]",
                    db_name=db_name,
                    collection_name=collection_name,
                )
            stats = database.command("collStats", collection_name)
        except PyMongoError as e:
            logger.warning(
                "collStats failed",
                user=self._user,
                db_name=db_name,
                collection_name=collection_name,
                error=str(e),
            )
            raise CollectionError(
                ErrorCode.GET_COLL_STATS_EXCEPTION,
                str(e),
                db_name=db_name,
                collection_name=collection_name,
            ) from e

        return flatten_stats(stats)
