"""Statistics services for mongoscope."""

from mongoscope.services.collection import CollectionService
from mongoscope.services.database import DatabaseService
from mongoscope.services.server import ServerService

__all__ = ["CollectionService", "DatabaseService", "ServerService"]
