"""``/models``: list, retrieve and delete models."""

from __future__ import annotations

from typing import Any, Dict

from .base import APIResource


class Models(APIResource):
    async def list(self) -> Dict[str, Any]:
        """List the models currently available to the account."""
        return await self._client.get("/models")

    async def retrieve(self, model: str) -> Dict[str, Any]:
        return await self._client.get(f"/models/{model}")

    async def delete(self, model: str) -> Dict[str, Any]:
        """Delete a fine-tuned model owned by the organization."""
        return await self._client.delete(f"/models/{model}")


__all__ = ["Models"]
