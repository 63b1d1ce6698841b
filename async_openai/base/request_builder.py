"""Assemble outbound requests from a configuration snapshot.

Pure request assembly: no network I/O happens here. Every request carries
``Authorization: Bearer <api_key>`` and, when an organization id is set,
the organization header. The body is either JSON or a multipart form, never
both.

Header values are validated up front; a value that cannot be sent on the wire
(control characters, CR/LF, non-ASCII) raises :class:`ConfigError` instead of
failing later inside the transport.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

import httpx
from pydantic import BaseModel

from ..config.defaults import EVENT_STREAM_CONTENT_TYPE, ORGANIZATION_HEADER
from .dto.multipart import MultipartForm
from .errors import ConfigError

if TYPE_CHECKING:  # pragma: no cover
    from ..config.client_config import ClientConfig

JsonPayload = Union[Mapping[str, Any], BaseModel]
QueryParams = Mapping[str, Any]

# HTAB is the only control character allowed inside a field value.
_INVALID_HEADER_CHARS = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")


def header_value(name: str, value: str) -> str:
    """Return ``value`` if it is a legal header value, else raise ``ConfigError``.

    A field value may not start or end with SP/HTAB; the HTTP/1.1 layer
    refuses such values at send time.
    """
    if not value.isascii() or _INVALID_HEADER_CHARS.search(value):
        raise ConfigError(f"invalid characters in {name} header value")
    if value != value.strip(" \t"):
        raise ConfigError(f"leading or trailing whitespace in {name} header value")
    return value


def auth_headers(config: "ClientConfig") -> Dict[str, str]:
    """Authorization and (optional) organization headers for ``config``.

    An empty API key still produces a sendable ``Bearer`` header; the server
    decides whether to reject it.
    """
    credentials = f"Bearer {config.api_key}" if config.api_key else "Bearer"
    headers = {"Authorization": header_value("Authorization", credentials)}
    if config.org_id:
        headers[ORGANIZATION_HEADER] = header_value(ORGANIZATION_HEADER, config.org_id)
    return headers


def json_body(payload: JsonPayload) -> Dict[str, Any]:
    """Return ``payload`` as a plain, mutable JSON mapping."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    return dict(payload)


def build_request(
    config: "ClientConfig",
    method: str,
    path: str,
    *,
    json: Optional[JsonPayload] = None,
    form: Optional[MultipartForm] = None,
    params: Optional[QueryParams] = None,
    stream: bool = False,
) -> httpx.Request:
    """Build an ``httpx.Request`` for ``{api_base}{path}``.

    Parameters:
        config: Configuration snapshot supplying credentials and base URL.
        method: HTTP verb.
        path: Path appended verbatim to ``config.api_base``.
        json: JSON body (mapping or pydantic model).
        form: Multipart body for upload endpoints.
        params: Query parameters.
        stream: Mark the request as an event-stream request (``Accept``
            header and idle-read timeout instead of a total deadline).

    Raises:
        ValueError: both ``json`` and ``form`` were supplied.
        ConfigError: a header value contains invalid characters.
    """
    if json is not None and form is not None:
        raise ValueError("a request carries either a JSON body or a multipart form, not both")

    headers = auth_headers(config)
    if stream:
        headers["Accept"] = EVENT_STREAM_CONTENT_TYPE

    body: Dict[str, Any] = {}
    if json is not None:
        body["json"] = json_body(json)
    elif form is not None:
        body["data"] = dict(form.fields)
        body["files"] = form.httpx_files()

    timeout = config.timeouts.for_request(stream=stream)
    return httpx.Request(
        method,
        f"{config.api_base}{path}",
        params=dict(params) if params else None,
        headers=headers,
        extensions={"timeout": timeout.as_dict()},
        **body,
    )


__all__ = [
    "JsonPayload",
    "QueryParams",
    "header_value",
    "auth_headers",
    "json_body",
    "build_request",
]
