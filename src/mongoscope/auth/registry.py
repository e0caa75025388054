"""In-memory session and connection registries.

These are the default implementations of
:class:`~mongoscope.auth.base.SessionLookup` and
:class:`~mongoscope.auth.base.ConnectionLookup`. The login subsystem
populates them; mongoscope only reads them while serving requests and
closes the clients on shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pymongo import MongoClient

logger = structlog.get_logger(__name__)


def _mask(token: str) -> str:
    return token[:8] + "..."


class SessionRegistry:
    """Token -> user mapping."""

    def __init__(self) -> None:
        self._users_by_token: dict[str, str] = {}

    def bind(self, token: str, user: str) -> None:
        """Bind a session token to a user.

        Args:
            token: The session token issued at login.
            user: The user key the token identifies.
        """
        self._users_by_token[token] = user
        logger.info("Session bound", token=_mask(token), user=user)

    def resolve(self, token: str) -> str | None:
        """Return the user bound to ``token``, or None."""
        return self._users_by_token.get(token)

    def revoke(self, token: str) -> bool:
        """Remove a token (logout).

        Returns:
            True if the token was bound, False otherwise.
        """
        if self._users_by_token.pop(token, None) is None:
            return False
        logger.info("Session revoked", token=_mask(token))
        return True

    def tokens_for(self, user: str) -> list[str]:
        """List the tokens currently bound to ``user``."""
        return [token for token, owner in self._users_by_token.items() if owner == user]

    def __len__(self) -> int:
        return len(self._users_by_token)

    def __contains__(self, token: object) -> bool:
        return token in self._users_by_token


class ConnectionRegistry:
    """User -> live ``MongoClient`` mapping."""

    def __init__(self) -> None:
        self._clients: dict[str, MongoClient] = {}

    def attach(self, user: str, client: MongoClient) -> None:
        """Register the client opened for ``user``.

        A client already registered for the user is closed and replaced.
        """
        previous = self._clients.get(user)
        if previous is not None and previous is not client:
            previous.close()
        self._clients[user] = client
        logger.info("Connection attached", user=user)

    def get(self, user: str) -> MongoClient | None:
        """Return the client for ``user``, or None."""
        return self._clients.get(user)

    def detach(self, user: str) -> bool:
        """Close and forget the client for ``user``.

        Returns:
            True if a client was registered, False otherwise.
        """
        client = self._clients.pop(user, None)
        if client is None:
            return False
        client.close()
        logger.info("Connection detached", user=user)
        return True

    def close_all(self) -> int:
        """Close every registered client.

        Returns:
            Number of clients closed.
        """
        users = list(self._clients)
        for user in users:
            self.detach(user)
        return len(users)

    @property
    def users(self) -> list[str]:
        """Users with a registered client."""
        return list(self._clients)

    def items(self) -> list[tuple[str, MongoClient]]:
        """Snapshot of ``(user, client)`` pairs."""
        return list(self._clients.items())

    def __len__(self) -> int:
        return len(self._clients)
