from __future__ import annotations

from typing import List

import httpx

from async_openai.base.request_builder import build_request
from async_openai.base.streaming.events import (
    MessageEvent,
    OpenEvent,
    SseDecoder,
    StreamEvent,
    TransportErrorEvent,
    event_source,
)
from async_openai.tests.utils import ScriptedStream, error_body, event_stream_response, make_config, mock_client, run_async


def _feed(lines: List[str]) -> List[MessageEvent]:
    decoder = SseDecoder()
    out = []
    for line in lines:
        event = decoder.feed(line)
        if event is not None:
            out.append(event)
    return out


def test_decoder_dispatches_on_blank_line():
    events = _feed(["data: {\"a\":1}", "", "data:{\"b\":2}", ""])
    assert [e.data for e in events] == ['{"a":1}', '{"b":2}']  # nosec B101 - asserts are appropriate in unit tests
    assert all(e.event == "message" for e in events)  # nosec B101


def test_decoder_joins_multiline_data_and_ignores_comments():
    events = _feed([": keep-alive", "event: update", "id: 7", "data: line1", "data: line2", "retry: 100", ""])
    assert events == [MessageEvent(data="line1\nline2", event="update", id="7")]  # nosec B101


def test_decoder_skips_events_without_data():
    assert _feed(["event: ping", "", ""]) == []  # nosec B101


def _collect(handler) -> List[StreamEvent]:
    async def _main():
        request = build_request(make_config(), "POST", "/completions", json={"stream": True}, stream=True)
        async with mock_client(handler) as http:
            return [event async for event in event_source(http, request)]

    return run_async(_main())


def test_event_source_yields_open_messages_then_eof():
    body = ScriptedStream([b"data: 1\n\n", b"data: [DONE]\n\n"])
    events = _collect(lambda request: event_stream_response(body))
    assert events[0] == OpenEvent(200)  # nosec B101
    assert [e.data for e in events[1:3]] == ["1", "[DONE]"]  # nosec B101
    assert isinstance(events[-1], TransportErrorEvent)  # nosec B101
    assert events[-1].message == "stream ended"  # nosec B101
    assert body.closed  # nosec B101


def test_event_source_reports_non_success_status_with_envelope():
    def handler(request):
        return httpx.Response(401, content=error_body("invalid_request_error", "bad key"))

    events = _collect(handler)
    assert len(events) == 1  # nosec B101
    assert events[0].message == "invalid status code: 401 (invalid_request_error: bad key)"  # nosec B101


def test_event_source_rejects_wrong_content_type():
    events = _collect(lambda request: httpx.Response(200, json={"id": 1}))
    assert len(events) == 1  # nosec B101
    assert events[0].message.startswith("invalid content type: application/json")  # nosec B101


def test_event_source_reports_connect_failure():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    events = _collect(handler)
    assert len(events) == 1  # nosec B101
    assert isinstance(events[0].raw, httpx.ConnectTimeout)  # nosec B101
