"""Shared asynchronous HTTP transport for the client.

Purpose:
    Build the single ``httpx.AsyncClient`` a :class:`~async_openai.Client`
    handle owns for its whole lifetime. Every call made through the handle,
    and through handles derived from it with ``with_*``, reuses this client's
    connection pool instead of allocating one per request.

External dependencies:
    - ``httpx`` for the underlying asynchronous HTTP client.

Redirects:
    - 3xx responses are followed with httpx's method-rewriting rules, so only
      the final response is decoded; a redirect is not a failure.

Timeout strategy:
    - The client-level timeout mirrors :class:`TimeoutConfig`, but requests
      built by :func:`build_request` carry their own ``timeout`` extension,
      which takes precedence.

Lifecycle & cleanup:
    - The owning handle closes the client via ``Client.aclose()`` or
      ``async with Client(...)``. Injected clients are never closed by the
      handle.
"""

from __future__ import annotations

from typing import Optional

import httpx

from ...config.defaults import HTTP_MAX_CONNECTIONS, HTTP_MAX_KEEPALIVE_CONNECTIONS
from ..timeouts import TimeoutConfig


def create_http_client(
    timeouts: Optional[TimeoutConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return a new pooled ``httpx.AsyncClient``.

    Parameters:
        timeouts: Timeout values for the client default; ``TimeoutConfig()``
            when omitted.
        transport: Optional transport override (``httpx.MockTransport`` in
            tests).
    """
    cfg = timeouts or TimeoutConfig()
    limits = httpx.Limits(
        max_connections=HTTP_MAX_CONNECTIONS,
        max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
    )
    return httpx.AsyncClient(
        timeout=cfg.for_request(),
        limits=limits,
        transport=transport,
        follow_redirects=True,
    )


__all__ = ["create_http_client"]
