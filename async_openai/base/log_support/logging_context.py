"""Structured logging context object for outbound requests.

:class:`LogContext` carries the fields shared by every event logged for one
request (method, URL, status, the server's request id) and flattens them,
together with the ``extra`` mapping, into a dict without ``None`` values.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

import httpx


@dataclass
class LogContext:
    """Structured context for request logging events."""

    method: Optional[str] = None
    url: Optional[str] = None
    status_code: Optional[int] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_request(cls, request: httpx.Request) -> "LogContext":
        # Query strings can carry caller data; log the path only.
        return cls(method=request.method, url=str(request.url).split("?", 1)[0])

    def with_response(self, response: httpx.Response) -> "LogContext":
        """Return a copy enriched with status and ``x-request-id``."""
        return LogContext(
            method=self.method,
            url=self.url,
            status_code=response.status_code,
            request_id=response.headers.get("x-request-id"),
            extra=dict(self.extra),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
