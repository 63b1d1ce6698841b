"""Shared base for the per-endpoint method groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..client import Client


class APIResource:
    """Binds a method group to the :class:`~async_openai.client.Client` that created it.

    Groups hold no state of their own; they only supply a path and a payload
    to the client's verbs, so they are cheap to create per call.
    """

    def __init__(self, client: "Client") -> None:
        self._client = client

    @property
    def client(self) -> "Client":
        return self._client


__all__ = ["APIResource"]
