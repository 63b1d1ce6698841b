"""
Pydantic models for the remote service's error envelope.

Every non-2xx response carries a body of shape
``{"error": {"message": str, "type": str, "param": ..., "code": str | null}}``.
The ``type`` field is the discriminant used for rate-limit classification.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ApiErrorBody(BaseModel):
    """Structured error reported by the remote service.

    Attributes:
        message: Human-readable description.
        type: Machine-readable category (e.g. ``rate_limit_exceeded``).
        param: Offending request parameter, when the server names one.
        code: Optional machine-readable code.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    message: str
    type: str
    param: Optional[Any] = None
    code: Optional[str] = None


class WrappedError(BaseModel):
    """Top-level ``{"error": {...}}`` wrapper."""

    error: ApiErrorBody


__all__ = ["ApiErrorBody", "WrappedError"]
