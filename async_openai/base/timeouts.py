"""Timeout configuration for outbound requests.

Centralizes the timeout values attached to every request the client builds
so no module carries ad-hoc numeric literals.

Supported environment variables (all optional, positive floats):
    ASYNC_OPENAI_CONNECT_TIMEOUT_SECONDS
    ASYNC_OPENAI_HTTP_TIMEOUT_SECONDS
    ASYNC_OPENAI_STREAM_IDLE_TIMEOUT_SECONDS

Requests built outside ``httpx.AsyncClient.build_request`` carry no timeout
unless one is attached through the ``timeout`` request extension;
:meth:`TimeoutConfig.for_request` produces that extension.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

CONNECT_TIMEOUT_ENV = "ASYNC_OPENAI_CONNECT_TIMEOUT_SECONDS"
HTTP_TIMEOUT_ENV = "ASYNC_OPENAI_HTTP_TIMEOUT_SECONDS"
STREAM_IDLE_TIMEOUT_ENV = "ASYNC_OPENAI_STREAM_IDLE_TIMEOUT_SECONDS"


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Deadline for establishing a connection.
        http_timeout_seconds: Read/write/pool deadline for single-object calls.
        stream_idle_timeout_seconds: Longest silence tolerated between two
            chunks of an event stream. ``None`` waits forever.
    """

    connect_timeout_seconds: float = 10.0
    http_timeout_seconds: float = 600.0
    stream_idle_timeout_seconds: float | None = 300.0

    def for_request(self, *, stream: bool = False) -> httpx.Timeout:
        if stream:
            return httpx.Timeout(
                self.http_timeout_seconds,
                connect=self.connect_timeout_seconds,
                read=self.stream_idle_timeout_seconds,
            )
        return httpx.Timeout(self.http_timeout_seconds, connect=self.connect_timeout_seconds)


def _parse_env_float(name: str, default: float | None) -> float | None:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return a :class:`TimeoutConfig` with environment overrides applied."""
    defaults = TimeoutConfig()
    return TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(CONNECT_TIMEOUT_ENV, defaults.connect_timeout_seconds),
        http_timeout_seconds=_parse_env_float(HTTP_TIMEOUT_ENV, defaults.http_timeout_seconds),
        stream_idle_timeout_seconds=_parse_env_float(
            STREAM_IDLE_TIMEOUT_ENV, defaults.stream_idle_timeout_seconds
        ),
    )


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "CONNECT_TIMEOUT_ENV",
    "HTTP_TIMEOUT_ENV",
    "STREAM_IDLE_TIMEOUT_ENV",
]
