"""Custom exceptions for mongoscope."""

from __future__ import annotations

from mongoscope.core.error_codes import ErrorCode, ErrorLevel


class MongoscopeError(Exception):
    """Base exception class for all mongoscope errors.

    Attributes:
        code: Error code reported to the client.
        message: Human readable description.
        level: Severity of the failure.
    """

    def __init__(self, code: ErrorCode, message: str, level: ErrorLevel = ErrorLevel.ERROR) -> None:
        """Initialize the exception.

        Args:
            code: Error code reported to the client.
            message: Human readable description.
            level: Severity of the failure.
        """
        self.code = code
        self.message = message
        self.level = level
        super().__init__(message)


class InvalidUserError(MongoscopeError):
    """Raised when a token does not resolve to a user with a live connection."""

    def __init__(self, message: str = "User not mapped to token id") -> None:
        """Initialize the exception with a custom message.

        Args:
            message: Why the token could not be resolved.
        """
        super().__init__(ErrorCode.INVALID_USER, message, ErrorLevel.FATAL)


class ValidationError(MongoscopeError):
    """Raised when a caller supplied name is empty or malformed."""


class DatabaseError(MongoscopeError):
    """Raised when database scoped statistics cannot be produced.

    Attributes:
        db_name: The database the request targeted.
    """

    def __init__(self, code: ErrorCode, message: str, db_name: str | None = None) -> None:
        """Initialize the exception.

        Args:
            code: Error code reported to the client.
            message: Human readable description.
            db_name: The database the request targeted.
        """
        self.db_name = db_name
        super().__init__(code, message)


class CollectionError(MongoscopeError):
    """Raised when collection scoped statistics cannot be produced.

    Attributes:
        db_name: The database the request targeted.
        collection_name: The collection the request targeted.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        db_name: str | None = None,
        collection_name: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            code: Error code reported to the client.
            message: Human readable description.
            db_name: The database the request targeted.
            collection_name: The collection the request targeted.
        """
        self.db_name = db_name
        self.collection_name = collection_name
        super().__init__(code, message)
