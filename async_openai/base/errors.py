"""Unified client error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``async_openai.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.openai_error import (
    ApiError,
    ConfigError,
    JSONDeserializeError,
    OpenAIError,
    StreamError,
    TransportError,
)
from .errors_parts.classification import classify_status, is_retryable_rate_limit

__all__ = [
    "ErrorCode",
    "OpenAIError",
    "TransportError",
    "JSONDeserializeError",
    "StreamError",
    "ConfigError",
    "ApiError",
    "classify_status",
    "is_retryable_rate_limit",
]
