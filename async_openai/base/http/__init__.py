"""HTTP transport helpers."""

from .client import create_http_client

__all__ = ["create_http_client"]
