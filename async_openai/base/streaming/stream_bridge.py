"""Producer/consumer bridge from an event-stream connection to a lazy sequence.

``open_stream`` spawns one detached asyncio task per stream. The task owns
the connection, classifies each wire event and publishes
:class:`StreamItem` values onto a FIFO queue; the caller pulls them through
the returned :class:`StreamHandle`:

    async with await client.post_stream("/completions", payload) as stream:
        async for item in stream:
            print(item.unwrap())

The sequence ends on ``[DONE]``, after one ``StreamError`` item, or when the
consumer goes away. Closing the handle (``aclose`` / ``async with``) or
letting it be garbage collected cancels the producer, which closes the
connection; ``wait_closed`` and ``done`` make that observable.

The queue is unbounded: a slow consumer exerts no backpressure on the
producer, and a fast server can grow the buffer without limit.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import weakref
from typing import Any, AsyncIterator, Generic, Optional, Set, TypeVar

import httpx

from ...config.defaults import STREAM_DONE_SENTINEL
from ..errors import JSONDeserializeError, StreamError
from ..logging import LogContext, get_logger, normalized_log_event
from ..response_decoder import JsonObject, decode_payload
from .events import MessageEvent, OpenEvent, StreamEvent, TransportErrorEvent, event_source
from .stream_item import StreamItem

T = TypeVar("T")

logger = get_logger(__name__)

_STREAM_END = object()
# The event loop only keeps weak references to tasks.
_RUNNING: Set["asyncio.Task[None]"] = set()


class StreamBridge(Generic[T]):
    """Producer side: consumes wire events and republishes them as items.

    Holds only a weak reference to its :class:`StreamHandle`, so a discarded
    handle is detected on the next publish.
    """

    def __init__(
        self,
        events: AsyncIterator[StreamEvent],
        output_type: Any,
        queue: "asyncio.Queue[object]",
        ctx: Optional[LogContext] = None,
    ) -> None:
        self._events = events
        self._output_type = output_type
        self._queue = queue
        self._ctx = ctx
        self._consumer: Optional["weakref.ReferenceType[StreamHandle[T]]"] = None
        self._finished = False
        self.published = 0
        self.connection_closed = asyncio.Event()

    def attach(self, handle: "StreamHandle[T]") -> None:
        self._consumer = weakref.ref(handle)

    def _consumer_gone(self) -> bool:
        handle = self._consumer() if self._consumer is not None else None
        return handle is None or handle.closing

    def _publish(self, item: StreamItem[T]) -> bool:
        """Queue ``item``; False when nobody will ever read it."""
        if self._consumer_gone():
            return False
        self._queue.put_nowait(item)
        self.published += 1
        return True

    def _decode(self, data: str) -> StreamItem[T]:
        try:
            return StreamItem(value=decode_payload(data, self._output_type))
        except JSONDeserializeError as err:
            return StreamItem(error=err)

    async def run(self) -> None:
        """Consume the connection until ``[DONE]``, a transport error, or cancellation."""
        outcome = "eof"
        try:
            async with contextlib.aclosing(self._events) as events:
                async for event in events:
                    if isinstance(event, OpenEvent):
                        normalized_log_event(
                            logger, "stream.open", self._ctx, phase="open", level=logging.DEBUG
                        )
                        continue
                    if isinstance(event, TransportErrorEvent):
                        self._publish(StreamItem(error=StreamError(event.message, raw=event.raw)))
                        outcome = "error"
                        break
                    if isinstance(event, MessageEvent) and event.data == STREAM_DONE_SENTINEL:
                        outcome = "done"
                        break
                    if not self._publish(self._decode(event.data)):
                        outcome = "consumer_gone"
                        break
        except Exception as err:
            # Surface anything unexpected as the stream's single failure item.
            self._publish(StreamItem(error=StreamError(f"{type(err).__name__}: {err}", raw=err)))
            outcome = "error"
        normalized_log_event(
            logger,
            "stream.finalize",
            self._ctx,
            phase="finalize",
            level=logging.DEBUG,
            emitted=self.published > 0,
            error_code="stream" if outcome == "error" else None,
            outcome=outcome,
            items=self.published,
        )

    def finish(self, _task: Optional["asyncio.Task[None]"] = None) -> None:
        """Mark the connection closed and end the consumer's sequence (idempotent)."""
        if self._finished:
            return
        self._finished = True
        self.connection_closed.set()
        self._queue.put_nowait(_STREAM_END)


class StreamHandle(Generic[T]):
    """Single-consumer, non-restartable async iterator of :class:`StreamItem`.

    Disposal (``aclose``, leaving ``async with``, or garbage collection)
    terminates the producer task and closes the connection.
    """

    def __init__(
        self,
        bridge: StreamBridge[T],
        queue: "asyncio.Queue[object]",
        task: "asyncio.Task[None]",
    ) -> None:
        self._bridge = bridge
        self._queue = queue
        self._task = task
        self._exhausted = False
        self.closing = False

    def __aiter__(self) -> "StreamHandle[T]":
        return self

    async def __anext__(self) -> StreamItem[T]:
        if self._exhausted:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _STREAM_END:
            self._exhausted = True
            raise StopAsyncIteration
        return item  # type: ignore[return-value]

    @property
    def done(self) -> bool:
        """Whether the producer task has terminated."""
        return self._task.done()

    async def wait_closed(self) -> None:
        """Wait until the producer has released the connection."""
        await self._bridge.connection_closed.wait()

    async def aclose(self) -> None:
        """Cancel the producer and wait for the connection to close."""
        self.closing = True
        self._exhausted = True
        if not self._task.done():
            self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)

    async def __aenter__(self) -> "StreamHandle[T]":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __del__(self) -> None:
        task = getattr(self, "_task", None)
        if task is not None and not task.done():
            # the loop may already be closed at interpreter shutdown
            with contextlib.suppress(RuntimeError):
                task.cancel()


async def open_stream(
    http_client: httpx.AsyncClient,
    request: httpx.Request,
    output_type: Any = JsonObject,
) -> StreamHandle[Any]:
    """Start streaming ``request`` and return the consumer handle.

    Streaming requests are never retried. Must be awaited inside a running
    event loop; the connection is opened by the spawned producer task.
    """
    queue: "asyncio.Queue[object]" = asyncio.Queue()
    bridge: StreamBridge[Any] = StreamBridge(
        event_source(http_client, request),
        output_type,
        queue,
        LogContext.for_request(request),
    )
    task = asyncio.create_task(bridge.run(), name=f"sse {request.method} {request.url.path}")
    _RUNNING.add(task)
    task.add_done_callback(_RUNNING.discard)
    task.add_done_callback(bridge.finish)
    handle: StreamHandle[Any] = StreamHandle(bridge, queue, task)
    bridge.attach(handle)
    return handle


__all__ = ["StreamBridge", "StreamHandle", "open_stream"]
