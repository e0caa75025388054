"""Token validation shared by every stats endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mongoscope.exceptions import InvalidUserError

if TYPE_CHECKING:
    from pymongo import MongoClient

    from mongoscope.auth.base import ConnectionLookup, SessionLookup


def resolve_user(token: str | None, sessions: SessionLookup) -> str:
    """Resolve a caller supplied token to a user key.

    Args:
        token: The ``tokenId`` query parameter, possibly missing.
        sessions: The session lookup populated at login.

    Returns:
        The user key bound to the token.

    Raises:
        InvalidUserError: If the token is missing or not bound to a user.
    """
    if token is None or not token.strip():
        raise InvalidUserError("Token id not provided")

    user = sessions.resolve(token)
    if user is None:
        raise InvalidUserError("User not mapped to token id")
    return user


def resolve_client(user: str, connections: ConnectionLookup) -> MongoClient:
    """Return the live client for ``user``.

    Raises:
        InvalidUserError: If the user has no live connection.
    """
    client = connections.get(user)
    if client is None:
        raise InvalidUserError("No connection found for user")
    return client
