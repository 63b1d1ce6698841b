"""async_openai.config.env
=======================

Environment lookups for client defaults.

Failure Modes
-------------
Helpers never raise on unset variables. A missing API key resolves to the
empty string: the request still carries a syntactically valid
``Authorization`` header and the server decides whether to reject it.
"""

from __future__ import annotations

import os
from typing import Optional

from .defaults import API_BASE, API_BASE_ENV, API_KEY_ENV, ORG_ID_ENV


def _read(name: str) -> Optional[str]:
    val = os.environ.get(name)
    if val is None:
        return None
    val = val.strip()
    return val or None


def resolve_api_key() -> str:
    """Return ``OPENAI_API_KEY`` or ``""`` when unset."""
    return _read(API_KEY_ENV) or ""


def resolve_org_id() -> str:
    """Return ``OPENAI_ORG_ID`` or ``""`` when unset."""
    return _read(ORG_ID_ENV) or ""


def resolve_api_base() -> str:
    """Return ``OPENAI_API_BASE`` (trailing slash removed) or the default base URL."""
    base = _read(API_BASE_ENV)
    return base.rstrip("/") if base else API_BASE


__all__ = ["resolve_api_key", "resolve_org_id", "resolve_api_base"]
