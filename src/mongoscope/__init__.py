"""mongoscope: read-only MongoDB statistics over HTTP, built on Litestar.

Three endpoints report server, database and collection statistics for the
MongoDB connection of the user behind a session token. The login subsystem
that issues tokens and opens connections populates the registries; mongoscope
only reads them.

Quick Start:
    >>> from litestar import Litestar
    >>> from mongoscope import ConnectionRegistry, MongoscopeConfig, MongoscopePlugin, SessionRegistry
    >>>
    >>> sessions, connections = SessionRegistry(), ConnectionRegistry()
    >>> app = Litestar(plugins=[MongoscopePlugin(MongoscopeConfig(sessions=sessions, connections=connections))])
    >>>
    >>> # at login:
    >>> # connections.attach("alice", MongoClient(uri)); sessions.bind(token, "alice")
"""

from __future__ import annotations

__version__ = "0.1.0"

from mongoscope.auth import ConnectionLookup, ConnectionRegistry, SessionLookup, SessionRegistry
from mongoscope.exceptions import (
    CollectionError,
    DatabaseError,
    InvalidUserError,
    MongoscopeError,
    ValidationError,
)
from mongoscope.plugin import MongoscopeConfig, MongoscopePlugin
from mongoscope.services import CollectionService, DatabaseService, ServerService

__all__ = [
    "CollectionError",
    "CollectionService",
    "ConnectionLookup",
    "ConnectionRegistry",
    "DatabaseError",
    "DatabaseService",
    "InvalidUserError",
    "MongoscopeConfig",
    "MongoscopeError",
    "MongoscopePlugin",
    "ServerService",
    "SessionLookup",
    "SessionRegistry",
    "ValidationError",
]
