from __future__ import annotations

import json

import h11
import pytest
from pydantic import BaseModel

from async_openai.base.dto import MultipartForm
from async_openai.base.errors import ConfigError
from async_openai.base.request_builder import auth_headers, build_request, header_value
from async_openai.base.resilience import is_replayable
from async_openai.tests.utils import API_BASE, make_config


class _Prompt(BaseModel):
    model: str
    prompt: str
    suffix: str | None = None


def test_url_is_base_plus_path_and_bearer_header():
    req = build_request(make_config(), "GET", "/models")
    assert str(req.url) == f"{API_BASE}/models"  # nosec B101 - asserts are appropriate in unit tests
    assert req.headers["Authorization"] == "Bearer sk-test"  # nosec B101
    assert "OpenAI-Organization" not in req.headers  # nosec B101


def test_org_header_present_only_when_org_id_set():
    req = build_request(make_config(org_id="org-123"), "GET", "/models")
    assert req.headers["OpenAI-Organization"] == "org-123"  # nosec B101


def test_empty_api_key_still_sends_bearer_scheme():
    headers = auth_headers(make_config(api_key=""))
    # no trailing space: HTTP/1.1 refuses field values ending in whitespace
    assert headers == {"Authorization": "Bearer"}  # nosec B101


def test_json_body_from_mapping_and_model():
    req = build_request(make_config(), "POST", "/completions", json={"model": "m", "n": 2})
    assert req.headers["Content-Type"] == "application/json"  # nosec B101
    assert json.loads(req.content) == {"model": "m", "n": 2}  # nosec B101

    req = build_request(make_config(), "POST", "/completions", json=_Prompt(model="m", prompt="hi"))
    # None fields are left out of the wire body
    assert json.loads(req.content) == {"model": "m", "prompt": "hi"}  # nosec B101


def test_multipart_body_is_not_replayable():
    form = MultipartForm.build({"file": ("data.jsonl", b"{}\n", "application/jsonl")}, purpose="fine-tune")
    req = build_request(make_config(), "POST", "/files", form=form)
    assert req.headers["Content-Type"].startswith("multipart/form-data")  # nosec B101
    assert not is_replayable(req)  # nosec B101

    json_req = build_request(make_config(), "POST", "/edits", json={"model": "m"})
    assert is_replayable(json_req)  # nosec B101
    assert is_replayable(build_request(make_config(), "GET", "/models"))  # nosec B101


def test_json_and_form_together_rejected():
    form = MultipartForm.build({"file": ("a.txt", b"x", "text/plain")})
    with pytest.raises(ValueError):
        build_request(make_config(), "POST", "/files", json={"a": 1}, form=form)


def test_stream_request_accepts_event_stream_and_has_no_total_read_deadline():
    cfg = make_config()
    req = build_request(cfg, "GET", "/fine-tunes/ft-1/events", params={"stream": "true"}, stream=True)
    assert req.headers["Accept"] == "text/event-stream"  # nosec B101
    assert req.url.params["stream"] == "true"  # nosec B101
    assert req.extensions["timeout"]["read"] == cfg.timeouts.stream_idle_timeout_seconds  # nosec B101

    plain = build_request(cfg, "GET", "/models")
    assert plain.extensions["timeout"]["read"] == cfg.timeouts.http_timeout_seconds  # nosec B101
    assert plain.headers.get("Accept") != "text/event-stream"  # nosec B101


_BAD_VALUES = ["abc\r\nX-Injected: 1", "abc\x00", "clé", " org-1 ", "org-1\t", "\t"]


@pytest.mark.parametrize("field", ["api_key", "org_id"])
@pytest.mark.parametrize("bad", _BAD_VALUES)
def test_invalid_header_value_raises_config_error(field, bad):
    with pytest.raises(ConfigError):
        build_request(make_config(**{field: bad}), "GET", "/models")


@pytest.mark.parametrize(
    "overrides",
    [
        {"api_key": ""},
        {"api_key": "sk-test", "org_id": "org-1"},
        {"api_key": "sk-with inner space"},
    ],
)
@pytest.mark.parametrize("stream", [False, True])
def test_built_headers_are_accepted_by_http11_layer(overrides, stream):
    req = build_request(make_config(**overrides), "POST", "/completions", json={"model": "m"}, stream=stream)
    # h11 validates every name/value pair exactly as it would before sending
    h11.Request(method=req.method, target=req.url.raw_path, headers=list(req.headers.raw))


def test_header_value_allows_tab():
    assert header_value("X-Test", "a\tb") == "a\tb"  # nosec B101
