"""Session and connection lookup for mongoscope."""

from __future__ import annotations

from mongoscope.auth.base import ConnectionLookup, SessionLookup
from mongoscope.auth.guard import resolve_client, resolve_user
from mongoscope.auth.registry import ConnectionRegistry, SessionRegistry

__all__ = [
    "ConnectionLookup",
    "ConnectionRegistry",
    "SessionLookup",
    "SessionRegistry",
    "resolve_client",
    "resolve_user",
]
