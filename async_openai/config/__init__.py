"""Configuration layer for the client.

Sources, in order of precedence:
    1. In-code values (``ClientConfig(...)`` / ``with_*`` helpers)
    2. Environment variables (``OPENAI_API_KEY``, ``OPENAI_ORG_ID``,
       ``OPENAI_API_BASE``, ``ASYNC_OPENAI_*_TIMEOUT_SECONDS``)
    3. Built-in defaults in :mod:`async_openai.config.defaults`

There is no config-file support.
"""

from .client_config import ClientConfig
from .defaults import API_BASE, ORGANIZATION_HEADER, STREAM_DONE_SENTINEL
from .env import resolve_api_base, resolve_api_key, resolve_org_id

__all__ = [
    "ClientConfig",
    "API_BASE",
    "ORGANIZATION_HEADER",
    "STREAM_DONE_SENTINEL",
    "resolve_api_key",
    "resolve_org_id",
    "resolve_api_base",
]
