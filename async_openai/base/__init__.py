"""
Client Base Package

Request-execution engine shared by every resource group:

- Request building: auth/organization headers, JSON or multipart bodies
- Response decoding: success object vs. structured error envelope
- Resilience: exponential backoff and the rate-limit-aware retry executor
- Streaming: event-stream connection bridged to a lazy, cancellable sequence
"""

from .errors import (
    ApiError,
    ConfigError,
    ErrorCode,
    JSONDeserializeError,
    OpenAIError,
    StreamError,
    TransportError,
)
from .timeouts import TimeoutConfig, get_timeout_config
from .resilience import BackoffPolicy, execute, is_replayable
from .response_decoder import decode_payload, decode_response
from .request_builder import build_request
from .streaming import StreamHandle, StreamItem, open_stream

__all__ = [
    # Errors
    "ErrorCode",
    "OpenAIError",
    "TransportError",
    "JSONDeserializeError",
    "StreamError",
    "ConfigError",
    "ApiError",
    # Timeouts
    "TimeoutConfig",
    "get_timeout_config",
    # Resilience
    "BackoffPolicy",
    "execute",
    "is_replayable",
    # Decode / build
    "decode_payload",
    "decode_response",
    "build_request",
    # Streaming
    "StreamHandle",
    "StreamItem",
    "open_stream",
]
