"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `async_openai.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .openai_error import (
    ApiError,
    ConfigError,
    JSONDeserializeError,
    OpenAIError,
    StreamError,
    TransportError,
)
from .classification import classify_status, is_retryable_rate_limit

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
