"""``/fine-tunes``: create and follow fine-tuning jobs."""

from __future__ import annotations

from typing import Any, Dict

from ..base.request_builder import JsonPayload
from ..base.streaming import StreamHandle
from .base import APIResource


class FineTunes(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        """Start a job that fine-tunes a base model on an uploaded dataset."""
        return await self._client.post("/fine-tunes", request)

    async def list(self) -> Dict[str, Any]:
        return await self._client.get("/fine-tunes")

    async def retrieve(self, fine_tune_id: str) -> Dict[str, Any]:
        return await self._client.get(f"/fine-tunes/{fine_tune_id}")

    async def cancel(self, fine_tune_id: str) -> Dict[str, Any]:
        return await self._client.post(f"/fine-tunes/{fine_tune_id}/cancel")

    async def list_events(self, fine_tune_id: str) -> Dict[str, Any]:
        return await self._client.get(f"/fine-tunes/{fine_tune_id}/events")

    async def list_events_stream(self, fine_tune_id: str) -> StreamHandle[Dict[str, Any]]:
        """Follow job events as they happen; the stream ends when the job does."""
        return await self._client.get_stream(
            f"/fine-tunes/{fine_tune_id}/events", {"stream": "true"}
        )


__all__ = ["FineTunes"]
