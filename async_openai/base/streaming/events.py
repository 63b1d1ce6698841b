"""Server-sent-event wire layer.

Turns one ``httpx`` streaming response into a sequence of internal
:data:`StreamEvent` values:

* ``OpenEvent`` once the response is accepted (2xx, ``text/event-stream``);
* ``MessageEvent`` for every dispatched event;
* at most one ``TransportErrorEvent``, after which the sequence ends.

A non-2xx status, a wrong content type, a network failure and a stream that
ends without the ``[DONE]`` sentinel are all reported as a transport error.
These types never leave the streaming package.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import AsyncIterator, List, Optional, Union

import httpx

from ...config.defaults import EVENT_STREAM_CONTENT_TYPE
from ..errors import JSONDeserializeError
from ..response_decoder import decode_error, is_success


@dataclass(frozen=True)
class OpenEvent:
    """Connection accepted by the server."""

    status_code: int


@dataclass(frozen=True)
class MessageEvent:
    """One dispatched event; ``data`` is the joined ``data:`` lines."""

    data: str
    event: str = "message"
    id: Optional[str] = None


@dataclass(frozen=True)
class TransportErrorEvent:
    """Connection-level failure; always the last event of a stream."""

    message: str
    raw: Optional[Exception] = None


StreamEvent = Union[OpenEvent, MessageEvent, TransportErrorEvent]


@dataclass
class SseDecoder:
    """Incremental line decoder for the ``text/event-stream`` format.

    Feed lines without their terminators; a blank line dispatches the event
    collected so far. Comment lines (leading ``:``) and ``retry`` fields are
    ignored.
    """

    _data: List[str] = field(default_factory=list)
    _event: str = ""
    _last_id: Optional[str] = None

    def feed(self, line: str) -> Optional[MessageEvent]:
        if not line:
            return self._dispatch()
        if line.startswith(":"):
            return None
        name, sep, value = line.partition(":")
        if sep and value.startswith(" "):
            value = value[1:]
        if name == "data":
            self._data.append(value)
        elif name == "event":
            self._event = value
        elif name == "id" and "\x00" not in value:
            self._last_id = value
        return None

    def _dispatch(self) -> Optional[MessageEvent]:
        if not self._data:
            self._event = ""
            return None
        event = MessageEvent(
            data="\n".join(self._data),
            event=self._event or "message",
            id=self._last_id,
        )
        self._data = []
        self._event = ""
        return event


def _describe_status(status_code: int, body: bytes) -> str:
    try:
        error = decode_error(body)
    except JSONDeserializeError:
        return f"invalid status code: {status_code}"
    return f"invalid status code: {status_code} ({error.type}: {error.message})"


async def event_source(
    http_client: httpx.AsyncClient, request: httpx.Request
) -> AsyncIterator[StreamEvent]:
    """Open ``request`` as an event stream and yield its events.

    The response is closed when the generator finishes or is closed early.
    """
    try:
        response = await http_client.send(request, stream=True)
    except httpx.RequestError as err:
        yield TransportErrorEvent(f"{type(err).__name__}: {err}", raw=err)
        return

    try:
        if not is_success(response.status_code):
            body = await response.aread()
            yield TransportErrorEvent(_describe_status(response.status_code, body))
            return
        content_type = response.headers.get("content-type", "")
        if not content_type.startswith(EVENT_STREAM_CONTENT_TYPE):
            yield TransportErrorEvent(f"invalid content type: {content_type or '<missing>'}")
            return

        yield OpenEvent(response.status_code)
        decoder = SseDecoder()
        async for line in response.aiter_lines():
            event = decoder.feed(line)
            if event is not None:
                yield event
        yield TransportErrorEvent("stream ended")
    except httpx.RequestError as err:
        yield TransportErrorEvent(f"{type(err).__name__}: {err}", raw=err)
    finally:
        await response.aclose()


__all__ = [
    "OpenEvent",
    "MessageEvent",
    "TransportErrorEvent",
    "StreamEvent",
    "SseDecoder",
    "event_source",
]
