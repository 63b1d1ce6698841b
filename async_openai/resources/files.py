"""``/files``: upload and manage documents used by fine-tuning."""

from __future__ import annotations

from typing import Any, Dict

from ..base.dto.multipart import FileInput, MultipartForm, as_file
from .base import APIResource


class Files(APIResource):
    async def list(self) -> Dict[str, Any]:
        return await self._client.get("/files")

    async def create(self, file: FileInput, purpose: str) -> Dict[str, Any]:
        """Upload ``file`` for ``purpose`` (e.g. ``"fine-tune"``); never retried."""
        form = MultipartForm.build({"file": as_file(file)}, purpose=purpose)
        return await self._client.post_form("/files", form)

    async def retrieve(self, file_id: str) -> Dict[str, Any]:
        return await self._client.get(f"/files/{file_id}")

    async def delete(self, file_id: str) -> Dict[str, Any]:
        return await self._client.delete(f"/files/{file_id}")


__all__ = ["Files"]
