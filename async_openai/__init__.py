"""async_openai package

Asynchronous client core for OpenAI-compatible HTTP APIs.

Purpose:
    Issue authenticated requests and normalize the two response shapes the
    API produces: a single decoded object, and a server-sent-event stream of
    decoded objects. Rate-limited calls are retried with exponential backoff;
    streams are lazy, cancellable async iterators.

Public API (re-exported):
    - Version: ``__version__``
    - Handle: :class:`Client`, :class:`ClientConfig`
    - Policies: :class:`BackoffPolicy`, :class:`TimeoutConfig`
    - Payloads: :class:`MultipartForm`, :class:`ApiErrorBody`
    - Streams: :class:`StreamHandle`, :class:`StreamItem`
    - Exceptions: :class:`OpenAIError` and its subclasses, :class:`ErrorCode`

Example::

    async with Client() as client:
        stream = await client.completions().create_stream(
            {"model": "text-davinci-003", "prompt": "Say hi"}
        )
        async for item in stream:
            print(item.unwrap()["choices"][0]["text"], end="")
"""

from .base.dto import ApiErrorBody, MultipartForm, file_from_path
from .base.errors import (
    ApiError,
    ConfigError,
    ErrorCode,
    JSONDeserializeError,
    OpenAIError,
    StreamError,
    TransportError,
)
from .base.resilience import BackoffPolicy
from .base.streaming import StreamHandle, StreamItem
from .base.timeouts import TimeoutConfig
from .client import Client
from .config import ClientConfig

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Handle
    "Client",
    "ClientConfig",
    # Policies
    "BackoffPolicy",
    "TimeoutConfig",
    # Payloads
    "ApiErrorBody",
    "MultipartForm",
    "file_from_path",
    # Streams
    "StreamHandle",
    "StreamItem",
    # Exceptions
    "ErrorCode",
    "OpenAIError",
    "TransportError",
    "JSONDeserializeError",
    "ApiError",
    "StreamError",
    "ConfigError",
]
