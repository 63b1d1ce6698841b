"""``/embeddings``: vector representations of input text."""

from __future__ import annotations

from typing import Any, Dict

from ..base.request_builder import JsonPayload
from .base import APIResource


class Embeddings(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        return await self._client.post("/embeddings", request)


__all__ = ["Embeddings"]
