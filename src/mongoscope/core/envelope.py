"""The fixed JSON envelopes returned by every mongoscope endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mongoscope.core.error_codes import ErrorCode, ErrorLevel


@dataclass
class StatsEnvelope:
    """Successful response: ``{"response": {"result": ...}, "totalRecords"?: n}``.

    ``totalRecords`` is only emitted for array results.
    """

    result: Any

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        payload: dict[str, Any] = {"response": {"result": self.result}}
        if isinstance(self.result, list):
            payload["totalRecords"] = len(self.result)
        return payload


@dataclass
class ErrorEnvelope:
    """Error response: ``{"response": {"error": {code, message, level}}}``."""

    code: ErrorCode | str
    message: str
    level: ErrorLevel = ErrorLevel.ERROR
    correlation_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        error: dict[str, Any] = {
            "code": self.code.value if isinstance(self.code, ErrorCode) else self.code,
            "message": self.message,
            "level": self.level.value,
        }
        if self.correlation_id:
            error["correlation_id"] = self.correlation_id
        return {"response": {"error": error}}
