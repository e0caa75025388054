"""Pytest configuration and fixtures for mongoscope tests."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any
from unittest.mock import MagicMock

import pytest
from bson import Int64
from litestar import Litestar
from litestar.testing import TestClient

from mongoscope.app import create_app
from mongoscope.auth.registry import ConnectionRegistry, SessionRegistry
from mongoscope.plugin import MongoscopeConfig

TOKEN = "tok-3f9a2c7e5b1d4a60"
USER = "alice"

SERVER_STATUS: dict[str, Any] = {
    "host": "db1.example.net:27017",
    "version": "7.0.12",
    "uptime": 86400.0,
    "localTime": datetime(2024, 5, 1, 12, 0, tzinfo=UTC),
    "connections": {"current": 4, "available": 838856},
    "ok": 1.0,
}

DB_STATS: dict[str, Any] = {
    "db": "shop",
    "collections": 2,
    "objects": Int64(1250),
    "avgObjSize": 212.5,
    "dataSize": 265625.0,
    "ok": 1.0,
}

COLL_STATS: dict[str, Any] = {
    "ns": "shop.orders",
    "count": 1200,
    "size": 254400,
    "indexSizes": {"_id_": 36864},
    "capped": False,
    "ok": 1.0,
}


def _database_command(name: str, *args: Any, **kwargs: Any) -> dict[str, Any]:
    return DB_STATS if name == "dbStats" else COLL_STATS


# Driver fixtures


@pytest.fixture
def mongo_database() -> MagicMock:
    """A fake ``Database`` holding one ``orders`` collection."""
    database = MagicMock(name="Database")
    database.command.side_effect = _database_command
    database.list_collection_names.return_value = ["orders"]
    return database


@pytest.fixture
def mongo_client(mongo_database: MagicMock) -> MagicMock:
    """A fake ``MongoClient`` with ``admin`` and ``shop`` databases."""
    client = MagicMock(name="MongoClient")
    client.admin.command.return_value = SERVER_STATUS
    client.list_database_names.return_value = ["admin", "shop"]
    client.__getitem__.return_value = mongo_database
    return client


# Registry fixtures


@pytest.fixture
def sessions() -> SessionRegistry:
    """A session registry with ``TOKEN`` bound to ``USER``."""
    registry = SessionRegistry()
    registry.bind(TOKEN, USER)
    return registry


@pytest.fixture
def connections(mongo_client: MagicMock) -> ConnectionRegistry:
    """A connection registry with ``USER`` attached to the fake client."""
    registry = ConnectionRegistry()
    registry.attach(USER, mongo_client)
    return registry


# App and client fixtures


@pytest.fixture
def app(sessions: SessionRegistry, connections: ConnectionRegistry) -> Litestar:
    """Create the mongoscope app wired to the test registries."""
    return create_app(MongoscopeConfig(sessions=sessions, connections=connections))


@pytest.fixture
def client(app: Litestar) -> TestClient[Litestar]:
    """Create a test client for the app."""
    return TestClient(app=app)


@pytest.fixture
def token() -> str:
    """The session token bound in the ``sessions`` fixture."""
    return TOKEN


@pytest.fixture
def user() -> str:
    """The user attached in the ``connections`` fixture."""
    return USER
