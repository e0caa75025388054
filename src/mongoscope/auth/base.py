"""Collaborator contracts consumed by the stats endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pymongo import MongoClient


@runtime_checkable
class SessionLookup(Protocol):
    """Maps session tokens issued at login to user identities.

    The login subsystem owns the lifecycle of the mapping; the stats
    endpoints only read from it.
    """

    def resolve(self, token: str) -> str | None:
        """Return the user bound to ``token``.

        Args:
            token: The opaque session token supplied by the caller.

        Returns:
            The user key if the token is currently bound, None otherwise.
        """
        ...

    def __len__(self) -> int: ...


@runtime_checkable
class ConnectionLookup(Protocol):
    """Maps user identities to live MongoDB clients."""

    def get(self, user: str) -> MongoClient | None:
        """Return the client opened for ``user``.

        Args:
            user: The user key resolved from a session token.

        Returns:
            The live client, or None if the user has no connection.
        """
        ...

    def items(self) -> list[tuple[str, MongoClient]]:
        """Return a snapshot of ``(user, client)`` pairs."""
        ...

    def __len__(self) -> int: ...
