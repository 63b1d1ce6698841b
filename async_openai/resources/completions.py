"""``/completions``: single-shot and streamed text completions."""

from __future__ import annotations

from typing import Any, Dict

from ..base.request_builder import JsonPayload, json_body
from ..base.streaming import StreamHandle
from .base import APIResource


class Completions(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        """Create a completion and return the decoded response object."""
        return await self._client.post("/completions", request)

    async def create_stream(self, request: JsonPayload) -> StreamHandle[Dict[str, Any]]:
        """Create a completion streamed as partial objects.

        ``stream`` is forced to ``true`` in the body; each item on the
        returned handle is one ``text_completion`` chunk.
        """
        body = json_body(request)
        body["stream"] = True
        return await self._client.post_stream("/completions", body)


__all__ = ["Completions"]
