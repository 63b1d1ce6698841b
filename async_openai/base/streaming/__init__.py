"""Streaming package.

Exposes the caller-facing stream types; wire events stay internal to
``events``.
"""

from .stream_item import StreamItem
from .stream_bridge import StreamBridge, StreamHandle, open_stream

__all__ = [
    "StreamItem",
    "StreamBridge",
    "StreamHandle",
    "open_stream",
]
