"""
Normalized client error codes (taxonomy).

Defines the `ErrorCode` enumeration carried by every :class:`OpenAIError`.
Values are lowercase snake_case and are considered a stable public contract
for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    QUOTA_EXCEEDED = "quota_exceeded"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    TRANSIENT = "transient"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    JSON_DESERIALIZE = "json_deserialize"
    STREAM = "stream"
    CONFIG = "config"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
