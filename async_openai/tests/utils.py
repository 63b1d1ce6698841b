"""Shared fakes for driving the client without a network.

Exports:
    - run_async(coro): run a coroutine to completion on a fresh event loop
    - mock_client(handler): ``httpx.AsyncClient`` backed by ``httpx.MockTransport``
    - make_config(**overrides): ``ClientConfig`` pointing at a fake host
    - error_body(type_, message): JSON error envelope bytes
    - sse(*payloads): encode ``data:`` events
    - ScriptedStream: response body that records whether it was closed
    - FeedStream: response body fed chunk by chunk from the test
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, AsyncIterator, Callable, Iterable, List, Optional

import httpx

from async_openai.base.resilience import BackoffPolicy
from async_openai.config import ClientConfig

API_BASE = "https://api.test/v1"

# No jitter, tiny intervals: retries stay fast and delays are predictable.
FAST_BACKOFF = BackoffPolicy(
    initial_interval=0.01,
    randomization_factor=0.0,
    multiplier=2.0,
    max_interval=0.05,
    max_elapsed_time=5.0,
)


def run_async(coro):
    return asyncio.run(coro)


def mock_client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_config(**overrides: Any) -> ClientConfig:
    values = {"api_key": "sk-test", "api_base": API_BASE, "backoff": FAST_BACKOFF}
    values.update(overrides)
    return ClientConfig(**values)


def error_body(type_: str, message: str, code: Optional[str] = None) -> bytes:
    return json.dumps({"error": {"message": message, "type": type_, "param": None, "code": code}}).encode()


def sse(*payloads: str) -> bytes:
    return b"".join(f"data: {p}\n\n".encode() for p in payloads)


def event_stream_response(stream: httpx.AsyncByteStream, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, headers={"content-type": "text/event-stream"}, stream=stream)


class ScriptedStream(httpx.AsyncByteStream):
    """Yields fixed chunks, then optionally stays open until ``release`` is set."""

    def __init__(self, chunks: Iterable[bytes] = (), *, hold_open: bool = False) -> None:
        self._chunks = list(chunks)
        self._hold_open = hold_open
        self.release = asyncio.Event()
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self._chunks:
            yield chunk
        if self._hold_open:
            await self.release.wait()

    async def aclose(self) -> None:
        self.closed = True


class FeedStream(httpx.AsyncByteStream):
    """Body whose chunks are pushed by the test; ``end()`` finishes it."""

    def __init__(self) -> None:
        self._chunks: "asyncio.Queue[Optional[bytes]]" = asyncio.Queue()
        self.closed = False
        self.sent: List[bytes] = []

    def push(self, chunk: bytes) -> None:
        self._chunks.put_nowait(chunk)

    def end(self) -> None:
        self._chunks.put_nowait(None)

    async def __aiter__(self) -> AsyncIterator[bytes]:
        while True:
            chunk = await self._chunks.get()
            if chunk is None:
                return
            self.sent.append(chunk)
            yield chunk

    async def aclose(self) -> None:
        self.closed = True
