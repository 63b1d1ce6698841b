"""Retry executor behaviour against a scripted transport."""

from __future__ import annotations

import json
from typing import List

import httpx
import pytest

from async_openai.base.dto import MultipartForm
from async_openai.base.errors import ApiError, ErrorCode, JSONDeserializeError, TransportError
from async_openai.base.request_builder import build_request
from async_openai.base.resilience import BackoffPolicy, execute, retry
from async_openai.tests.utils import FAST_BACKOFF, error_body, make_config, mock_client, run_async


class _Script:
    """MockTransport handler replaying canned responses in order."""

    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses[min(len(self.requests), len(self._responses)) - 1]


@pytest.fixture()
def sleeps(monkeypatch: pytest.MonkeyPatch) -> List[float]:
    recorded: List[float] = []

    async def _fake_sleep(delay: float) -> None:
        recorded.append(delay)

    monkeypatch.setattr(retry, "_sleep", _fake_sleep)
    return recorded


def _rate_limited() -> httpx.Response:
    return httpx.Response(429, content=error_body("rate_limit_exceeded", "slow down"))


def _call(script: _Script, request: httpx.Request, policy: BackoffPolicy = FAST_BACKOFF):
    async def _main():
        async with mock_client(script) as http:
            return await execute(http, request, policy)

    return run_async(_main())


def test_success_after_single_attempt(sleeps):
    script = _Script(httpx.Response(200, json={"id": "abc"}))
    out = _call(script, build_request(make_config(), "GET", "/models/abc"))
    assert out == {"id": "abc"}  # nosec B101 - asserts are appropriate in unit tests
    assert len(script.requests) == 1  # nosec B101
    assert sleeps == []  # nosec B101


def test_rate_limit_retried_until_success(sleeps):
    script = _Script(_rate_limited(), _rate_limited(), httpx.Response(200, json={"id": "ok"}))
    request = build_request(make_config(), "POST", "/completions", json={"model": "m", "prompt": "p"})
    out = _call(script, request)
    assert out == {"id": "ok"}  # nosec B101
    assert len(script.requests) == 3  # nosec B101
    assert sleeps == [0.01, 0.02]  # nosec B101
    # every attempt resends the same body and credentials
    for sent in script.requests:
        assert json.loads(sent.content) == {"model": "m", "prompt": "p"}  # nosec B101
        assert sent.headers["Authorization"] == "Bearer sk-test"  # nosec B101


def test_insufficient_quota_is_permanent(sleeps):
    script = _Script(httpx.Response(429, content=error_body("insufficient_quota", "no credits")))
    with pytest.raises(ApiError) as ei:
        _call(script, build_request(make_config(), "POST", "/embeddings", json={"input": "x"}))
    assert ei.value.error.type == "insufficient_quota"  # nosec B101
    assert ei.value.code is ErrorCode.QUOTA_EXCEEDED  # nosec B101
    assert len(script.requests) == 1  # nosec B101
    assert sleeps == []  # nosec B101


@pytest.mark.parametrize("status", [400, 401, 404, 500, 503])
def test_other_api_errors_are_not_retried(sleeps, status):
    script = _Script(httpx.Response(status, content=error_body("server_error", "nope")))
    with pytest.raises(ApiError) as ei:
        _call(script, build_request(make_config(), "GET", "/files"))
    assert ei.value.status_code == status  # nosec B101
    assert len(script.requests) == 1  # nosec B101


def test_undecodable_error_body_is_permanent(sleeps):
    script = _Script(httpx.Response(429, content=b"<html>busy</html>"))
    with pytest.raises(JSONDeserializeError):
        _call(script, build_request(make_config(), "GET", "/models"))
    assert len(script.requests) == 1  # nosec B101


def test_transport_failure_is_not_retried(sleeps):
    calls = []

    def _refuse(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    async def _main():
        async with mock_client(_refuse) as http:
            return await execute(http, build_request(make_config(), "GET", "/models"), FAST_BACKOFF)

    with pytest.raises(TransportError) as ei:
        run_async(_main())
    assert isinstance(ei.value.raw, httpx.ConnectError)  # nosec B101
    assert len(calls) == 1  # nosec B101


def test_multipart_request_runs_exactly_once(sleeps, log_stream):
    script = _Script(_rate_limited(), httpx.Response(200, json={"id": "file-1"}))
    form = MultipartForm.build({"file": ("train.jsonl", b"{}\n", "application/jsonl")}, purpose="fine-tune")
    request = build_request(make_config(), "POST", "/files", form=form)
    with pytest.raises(ApiError):
        _call(script, request)
    assert len(script.requests) == 1  # nosec B101
    assert sleeps == []  # nosec B101
    events = [json.loads(line)["event"] for line in log_stream.getvalue().splitlines()]
    assert "request.not_replayable" in events  # nosec B101


def test_exhausted_budget_raises_last_rate_limit(sleeps, log_stream):
    script = _Script(_rate_limited())
    policy = BackoffPolicy(initial_interval=0.01, randomization_factor=0.0, max_elapsed_time=0.0)
    with pytest.raises(ApiError) as ei:
        _call(script, build_request(make_config(), "GET", "/models"), policy)
    assert ei.value.status_code == 429  # nosec B101
    assert len(script.requests) == 1  # nosec B101
    records = [json.loads(line) for line in log_stream.getvalue().splitlines()]
    assert any(r["event"] == "request.retry_exhausted" and r["level"] == "WARNING" for r in records)  # nosec B101


def test_rate_limit_logged_as_warning_with_server_message(sleeps, log_stream):
    script = _Script(_rate_limited(), httpx.Response(200, json={}, headers={"x-request-id": "req-9"}))
    _call(script, build_request(make_config(), "GET", "/models?limit=5"))
    records = [json.loads(line) for line in log_stream.getvalue().splitlines()]
    warned = [r for r in records if r["event"] == "request.rate_limited"]
    assert len(warned) == 1  # nosec B101
    assert warned[0]["level"] == "WARNING"  # nosec B101
    assert warned[0]["message"] == "Rate limited: slow down"  # nosec B101
    assert warned[0]["attempt"] == 1  # nosec B101
    assert warned[0]["status_code"] == 429  # nosec B101
    assert "?" not in warned[0]["url"]  # nosec B101
