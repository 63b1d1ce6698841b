"""async_openai.config.defaults
===========================

Central place for small, stable default values used across the package.
Only plain constants live here so any layer can import them without creating
circular dependencies.
"""

from __future__ import annotations

# ---- Remote API ----
# Default v1 API base URL; request paths are appended verbatim.
API_BASE = "https://api.openai.com/v1"
# Header carrying the organization id when one is configured.
ORGANIZATION_HEADER = "OpenAI-Organization"
# Data value marking graceful end of an event stream.
STREAM_DONE_SENTINEL = "[DONE]"
# Content type an event-stream response must declare.
EVENT_STREAM_CONTENT_TYPE = "text/event-stream"

# ---- Environment variables ----
API_KEY_ENV = "OPENAI_API_KEY"
ORG_ID_ENV = "OPENAI_ORG_ID"
API_BASE_ENV = "OPENAI_API_BASE"

# ---- Transport pool ----
HTTP_MAX_CONNECTIONS = 100
HTTP_MAX_KEEPALIVE_CONNECTIONS = 20


__all__ = [
    "API_BASE",
    "ORGANIZATION_HEADER",
    "STREAM_DONE_SENTINEL",
    "EVENT_STREAM_CONTENT_TYPE",
    "API_KEY_ENV",
    "ORG_ID_ENV",
    "API_BASE_ENV",
    "HTTP_MAX_CONNECTIONS",
    "HTTP_MAX_KEEPALIVE_CONNECTIONS",
]
