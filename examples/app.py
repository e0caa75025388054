"""Minimal example showing mongoscope usage with Litestar.

This example binds one session token to one MongoDB client and mounts the
stats endpoints through the plugin.

The application will:
    - Open a client for the user ``demo`` against $MONGO_URI
    - Bind the token ``demo-token`` to that user
    - Mount the stats endpoints at /stats

Running the Application:
    MONGO_URI=mongodb://localhost:27017 python examples/app.py

Example API Usage:
    # Server status
    curl "http://127.0.0.1:8000/stats?tokenId=demo-token"

    # Database statistics
    curl "http://127.0.0.1:8000/stats/db/admin?tokenId=demo-token"

    # Collection statistics
    curl "http://127.0.0.1:8000/stats/db/admin/collection/system.version?tokenId=demo-token"
"""

from __future__ import annotations

from pymongo import MongoClient

from mongoscope import ConnectionRegistry, MongoscopeConfig, SessionRegistry
from mongoscope.app import create_app
from mongoscope.core.config import MongoscopeSettings

settings = MongoscopeSettings()

sessions = SessionRegistry()
connections = ConnectionRegistry()

connections.attach(
    "demo",
    MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=settings.server_selection_timeout_ms),
)
sessions.bind("demo-token", "demo")

app = create_app(MongoscopeConfig(sessions=sessions, connections=connections), debug=True)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="127.0.0.1",
        port=8000,
        log_level="info",
    )
