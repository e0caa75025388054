"""Shared building blocks for mongoscope: envelopes, errors, logging."""

from mongoscope.core.envelope import ErrorEnvelope, StatsEnvelope
from mongoscope.core.error_codes import ErrorCode, ErrorLevel

__all__ = ["ErrorCode", "ErrorEnvelope", "ErrorLevel", "StatsEnvelope"]
