"""Conversion of BSON driver documents into JSON-safe values."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from bson import Decimal128, Int64, ObjectId, Timestamp, json_util
from bson.json_util import RELAXED_JSON_OPTIONS

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def to_json_safe(value: Any) -> Any:
    """Convert a BSON value (or whole document) into plain JSON types.

    Uses relaxed Extended JSON, so numbers stay numbers while dates, object
    ids and timestamps become ``{"$date": ...}`` style wrappers.
    """
    return json.loads(json_util.dumps(value, json_options=RELAXED_JSON_OPTIONS))


def bson_type_name(value: Any) -> str:  # noqa: PLR0911
    """Return the BSON type name of a decoded driver value."""
    if value is None:
        return "Null"
    # bool is a subclass of int
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, Int64):
        return "Long"
    if isinstance(value, int):
        return "Integer" if _INT32_MIN <= value <= _INT32_MAX else "Long"
    if isinstance(value, float):
        return "Double"
    if isinstance(value, Decimal128):
        return "Decimal128"
    if isinstance(value, str):
        return "String"
    if isinstance(value, datetime):
        return "Date"
    if isinstance(value, Timestamp):
        return "Timestamp"
    if isinstance(value, ObjectId):
        return "ObjectId"
    if isinstance(value, dict):
        return "Document"
    if isinstance(value, (list, tuple)):
        return "Array"
    return type(value).__name__


def flatten_stats(document: dict[str, Any]) -> list[dict[str, Any]]:
    """Flatten a statistics document into one entry per top-level key.

    Args:
        document: The document returned by ``dbStats`` or ``collStats``.

    Returns:
        Entries of the form ``{"Key": ..., "Value": ..., "Type": ...}`` in
        the order the driver returned the keys.
    """
    return [{"Key": key, "Value": to_json_safe(value), "Type": bson_type_name(value)} for key, value in document.items()]
