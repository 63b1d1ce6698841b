"""Pytest configuration for the client test suite.

Every test starts from a clean environment so ambient ``OPENAI_*`` variables
on a developer machine never leak into assertions, and log output can be
captured without depending on stderr capture.
"""

from __future__ import annotations

import io
import logging
from typing import Iterator

import pytest

from async_openai.base.logging import ROOT_LOGGER_NAME, get_logger
from async_openai.base.log_support import JsonFormatter

_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_ORG_ID",
    "OPENAI_API_BASE",
    "ASYNC_OPENAI_LOG_LEVEL",
    "ASYNC_OPENAI_CONNECT_TIMEOUT_SECONDS",
    "ASYNC_OPENAI_HTTP_TIMEOUT_SECONDS",
    "ASYNC_OPENAI_STREAM_IDLE_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove client-related environment variables for the duration of a test."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture()
def log_stream() -> Iterator[io.StringIO]:
    """Route the shared ``async_openai`` logger into an in-memory JSON buffer.

    The base logger does not propagate, so ``caplog`` never sees its records;
    the console handler is swapped for one writing to a ``StringIO`` and the
    original handlers and level are restored afterwards.
    """

    base = get_logger(ROOT_LOGGER_NAME)
    saved_handlers = list(base.handlers)
    saved_level = base.level

    buf = io.StringIO()
    handler = logging.StreamHandler(buf)
    handler.setFormatter(JsonFormatter())
    handler.setLevel(logging.DEBUG)
    setattr(handler, "_async_openai_console_handler", True)
    base.handlers[:] = [handler]
    base.setLevel(logging.DEBUG)
    yield buf
    base.handlers[:] = saved_handlers
    base.setLevel(saved_level)
