"""
Structured client exception types.

``OpenAIError`` wraps every failure surfaced by the client with a normalized
:class:`ErrorCode`. Subclasses name the failure kind:

* ``TransportError``: connection, DNS, timeout or body-read failure.
* ``JSONDeserializeError``: a body or event payload did not match the
  expected schema (success object or error envelope).
* ``ApiError``: the remote service returned a structured error envelope.
* ``StreamError``: protocol-level failure while consuming an event stream.
* ``ConfigError``: malformed configuration detected before any network I/O.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..dto.error_envelope import ApiErrorBody
from .classification import classify_status
from .error_code import ErrorCode


@dataclass
class OpenAIError(Exception):
    """Base client error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.code.value}: {self.message}"


class TransportError(OpenAIError):
    """Network-level failure. Never retried."""

    def __init__(self, message: str, raw: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.TRANSPORT, message=message, raw=raw)


class JSONDeserializeError(OpenAIError):
    """Payload did not decode into the expected shape."""

    def __init__(self, message: str, raw: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.JSON_DESERIALIZE, message=message, raw=raw)


class StreamError(OpenAIError):
    """Failure while consuming an event stream; terminates the stream."""

    def __init__(self, message: str, raw: Optional[Exception] = None) -> None:
        super().__init__(code=ErrorCode.STREAM, message=message, raw=raw)


class ConfigError(OpenAIError):
    """Malformed configuration (e.g. a header value with invalid characters)."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.CONFIG, message=message)


class ApiError(OpenAIError):
    """Error envelope returned by the remote service.

    Attributes:
        error: The decoded envelope body.
        status_code: HTTP status of the response that carried it.
    """

    def __init__(self, error: ApiErrorBody, status_code: int) -> None:
        super().__init__(code=classify_status(status_code, error), message=error.message)
        self.error = error
        self.status_code = status_code

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"{self.status_code} {self.error.type}: {self.message}"


__all__ = [
    "OpenAIError",
    "TransportError",
    "JSONDeserializeError",
    "StreamError",
    "ConfigError",
    "ApiError",
]
