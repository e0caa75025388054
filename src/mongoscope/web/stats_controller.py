"""Stats API controller for server, database and collection statistics."""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

import structlog
from litestar import Controller, get
from litestar.params import Parameter

from mongoscope.auth.base import ConnectionLookup, SessionLookup  # noqa: TC001
from mongoscope.auth.guard import resolve_user
from mongoscope.core.envelope import StatsEnvelope
from mongoscope.services.collection import CollectionService
from mongoscope.services.database import DatabaseService
from mongoscope.services.server import ServerService

logger = structlog.get_logger(__name__)

TokenId = Annotated[
    str | None,
    Parameter(query="tokenId", description="Token id given to the user at login", required=False),
]


class StatsController(Controller):
    """Read-only statistics of a MongoDB deployment.

    Every endpoint resolves ``tokenId`` to a user and the user to a live
    client before touching the driver. Failures are raised as
    ``MongoscopeError`` and rendered by the application exception handlers.
    """

    path = "/stats"
    tags: ClassVar[list[str]] = ["Stats"]

    @get("/", sync_to_thread=True)
    def get_server_stats(
        self,
        sessions: SessionLookup,
        connections: ConnectionLookup,
        token_id: TokenId = None,
    ) -> dict[str, Any]:
        """Get the ``serverStatus`` document of the user's server.

        Returns:
            ``{"response": {"result": <serverStatus>}}``.
        """
        logger.info("Received stats request", scope="server")
        try:
            user = resolve_user(token_id, sessions)
            result = ServerService(user, connections).get_server_stats()
            return StatsEnvelope(result).to_dict()
        finally:
            logger.info("Request completed", scope="server")

    @get("/db/{db_name:str}", sync_to_thread=True)
    def get_db_stats(
        self,
        db_name: str,
        sessions: SessionLookup,
        connections: ConnectionLookup,
        token_id: TokenId = None,
    ) -> dict[str, Any]:
        """Get the ``dbStats`` of a database.

        Returns:
            ``{"response": {"result": [...]}, "totalRecords": n}``.
        """
        logger.info("Received stats request", scope="database", db_name=db_name)
        try:
            user = resolve_user(token_id, sessions)
            result = DatabaseService(user, connections).get_db_stats(db_name)
            return StatsEnvelope(result).to_dict()
        finally:
            logger.info("Request completed", scope="database", db_name=db_name)

    @get("/db/{db_name:str}/collection/{collection_name:str}", sync_to_thread=True)
    def get_coll_stats(
        self,
        db_name: str,
        collection_name: str,
        sessions: SessionLookup,
        connections: ConnectionLookup,
        token_id: TokenId = None,
    ) -> dict[str, Any]:
        """Get the ``collStats`` of a collection.

        Returns:
            ``{"response": {"result": [...]}, "totalRecords": n}``.
        """
        logger.info(
            "Received stats request",
            scope="collection",
            db_name=db_name,
            collection_name=collection_name,
        )
        try:
            user = resolve_user(token_id, sessions)
            result = CollectionService(user, connections).get_coll_stats(db_name, collection_name)
            return StatsEnvelope(result).to_dict()
        finally:
            logger.info(
                "Request completed",
                scope="collection",
                db_name=db_name,
                collection_name=collection_name,
            )
