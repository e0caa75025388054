"""Error codes and severity levels carried in mongoscope error envelopes."""

from __future__ import annotations

from enum import Enum

from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ErrorCode(str, Enum):
    """Codes reported in the ``code`` field of an error envelope."""

    INVALID_USER = "INVALID_USER"
    DB_NAME_EMPTY = "DB_NAME_EMPTY"
    COLLECTION_NAME_EMPTY = "COLLECTION_NAME_EMPTY"
    UNDEFINED_DATABASE = "UNDEFINED_DATABASE"
    UNDEFINED_COLLECTION = "UNDEFINED_COLLECTION"
    GET_SERVER_STATS_EXCEPTION = "GET_SERVER_STATS_EXCEPTION"
    GET_DB_STATS_EXCEPTION = "GET_DB_STATS_EXCEPTION"
    GET_COLL_STATS_EXCEPTION = "GET_COLL_STATS_EXCEPTION"
    ANY_OTHER_EXCEPTION = "ANY_OTHER_EXCEPTION"


class ErrorLevel(str, Enum):
    """Severity of an error envelope."""

    ERROR = "ERROR"
    FATAL = "FATAL"


STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_USER: HTTP_401_UNAUTHORIZED,
    ErrorCode.DB_NAME_EMPTY: HTTP_400_BAD_REQUEST,
    ErrorCode.COLLECTION_NAME_EMPTY: HTTP_400_BAD_REQUEST,
    ErrorCode.UNDEFINED_DATABASE: HTTP_404_NOT_FOUND,
    ErrorCode.UNDEFINED_COLLECTION: HTTP_404_NOT_FOUND,
    ErrorCode.GET_SERVER_STATS_EXCEPTION: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.GET_DB_STATS_EXCEPTION: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.GET_COLL_STATS_EXCEPTION: HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.ANY_OTHER_EXCEPTION: HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(code: ErrorCode) -> int:
    """Return the HTTP status used when rendering ``code``."""
    return STATUS_BY_CODE.get(code, HTTP_500_INTERNAL_SERVER_ERROR)
