"""
Failure classification for remote API responses.

Two concerns live here and nowhere else:

* mapping an HTTP status (plus the error envelope ``type``) onto a normalized
  :class:`ErrorCode` for logging and for callers that branch on categories;
* the transient/permanent decision used by the retry executor.

The remote service reuses HTTP 429 both for "temporarily rate limited" and
for "quota exhausted". Only the envelope's ``type`` field tells them apart,
so the comparison is an open string match against ``insufficient_quota``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Optional

from .error_code import ErrorCode

if TYPE_CHECKING:  # pragma: no cover
    from ..dto.error_envelope import ApiErrorBody

RATE_LIMIT_STATUS = 429
INSUFFICIENT_QUOTA_TYPE = "insufficient_quota"


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def is_retryable_rate_limit(status_code: int, error: Optional["ApiErrorBody"]) -> bool:
    """Return True when a failed response is a transient rate limit.

    A response is transient iff its status is 429 and its envelope ``type`` is
    anything other than ``insufficient_quota``. Every other failure is
    permanent.
    """
    if status_code != RATE_LIMIT_STATUS:
        return False
    if error is None:
        return True
    return error.type != INSUFFICIENT_QUOTA_TYPE


def classify_status(status_code: int, error: Optional["ApiErrorBody"] = None) -> ErrorCode:
    """Map a non-success status (and optional envelope) to an :class:`ErrorCode`.

    Precedence:
        1. 429 with ``insufficient_quota`` -> ``QUOTA_EXCEEDED``.
        2. Exact status mapping.
        3. Any other 5xx -> ``SERVER_ERROR``; any other 4xx -> ``VALIDATION``.
        4. ``UNKNOWN`` fallback.
    """
    if status_code == RATE_LIMIT_STATUS and not is_retryable_rate_limit(status_code, error):
        return ErrorCode.QUOTA_EXCEEDED
    if status_code in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status_code]
    if 500 <= status_code < 600:
        return ErrorCode.SERVER_ERROR
    if 400 <= status_code < 500:
        return ErrorCode.VALIDATION
    return ErrorCode.UNKNOWN


__all__ = [
    "RATE_LIMIT_STATUS",
    "INSUFFICIENT_QUOTA_TYPE",
    "is_retryable_rate_limit",
    "classify_status",
]
