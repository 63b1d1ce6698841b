"""Caller-facing result of one stream event."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from ..errors import OpenAIError

T = TypeVar("T")


@dataclass(frozen=True)
class StreamItem(Generic[T]):
    """Either a decoded value or a classified error, never both.

    Fields:
      value: decoded payload (``None`` when ``error`` is set)
      error: ``JSONDeserializeError`` for a malformed payload (the stream
        continues) or ``StreamError`` for a transport failure (the stream ends)
    """

    value: Optional[T] = None
    error: Optional[OpenAIError] = None

    def is_error(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return ``value`` or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = ["StreamItem"]
