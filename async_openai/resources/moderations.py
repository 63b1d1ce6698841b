"""``/moderations``: content policy classification."""

from __future__ import annotations

from typing import Any, Dict

from ..base.request_builder import JsonPayload
from .base import APIResource


class Moderations(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        return await self._client.post("/moderations", request)


__all__ = ["Moderations"]
