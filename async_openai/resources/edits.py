"""``/edits``: instruction-driven edits of an input text."""

from __future__ import annotations

from typing import Any, Dict

from ..base.request_builder import JsonPayload
from .base import APIResource


class Edits(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        return await self._client.post("/edits", request)


__all__ = ["Edits"]
