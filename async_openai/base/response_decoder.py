"""Decode response bytes into either the expected object or a structured error.

Both the single-object path and the streaming path route bytes through this
module. The functions are pure: identical input always yields the identical
outcome (a returned value, or a raised :class:`ApiError` /
:class:`JSONDeserializeError`).
"""

from __future__ import annotations

import functools
from typing import Any, Dict, Union

from pydantic import TypeAdapter, ValidationError

from .dto.error_envelope import ApiErrorBody, WrappedError
from .errors import ApiError, JSONDeserializeError

JsonObject = Dict[str, Any]


@functools.lru_cache(maxsize=256)
def _adapter(output_type: Any) -> TypeAdapter:
    return TypeAdapter(output_type)


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def decode_error(body: Union[bytes, str]) -> ApiErrorBody:
    """Parse an error envelope, raising :class:`JSONDeserializeError` on mismatch."""
    try:
        return WrappedError.model_validate_json(body).error
    except ValidationError as err:
        raise JSONDeserializeError(f"invalid error envelope: {err}", raw=err) from err


def decode_payload(data: Union[bytes, str], output_type: Any = JsonObject) -> Any:
    """Validate one JSON document against ``output_type``."""
    try:
        return _adapter(output_type).validate_json(data)
    except ValidationError as err:
        raise JSONDeserializeError(f"invalid response payload: {err}", raw=err) from err


def decode_response(status_code: int, body: bytes, output_type: Any = JsonObject) -> Any:
    """Return the decoded success object or raise the classified failure.

    Raises:
        ApiError: non-2xx status with a well-formed error envelope.
        JSONDeserializeError: the body matched neither the envelope (non-2xx)
            nor ``output_type`` (2xx).
    """
    if not is_success(status_code):
        raise ApiError(decode_error(body), status_code=status_code)
    return decode_payload(body, output_type)


__all__ = [
    "JsonObject",
    "is_success",
    "decode_error",
    "decode_payload",
    "decode_response",
]
