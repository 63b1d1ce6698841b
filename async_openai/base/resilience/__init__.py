"""Retry machinery: backoff schedule and the retrying executor."""

from .backoff import DEFAULT_BACKOFF_POLICY, BackoffPolicy, ExponentialBackoff
from .retry import execute, is_replayable, send_once

__all__ = [
    "BackoffPolicy",
    "ExponentialBackoff",
    "DEFAULT_BACKOFF_POLICY",
    "execute",
    "is_replayable",
    "send_once",
]
