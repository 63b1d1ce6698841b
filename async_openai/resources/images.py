"""``/images``: generation from a prompt, edits and variations of an image.

Edits and variations upload the source image as ``multipart/form-data``;
those calls are executed once and never retried.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..base.dto.multipart import FileInput, MultipartForm, as_file
from ..base.request_builder import JsonPayload
from .base import APIResource


class Images(APIResource):
    async def create(self, request: JsonPayload) -> Dict[str, Any]:
        """Create images from a text prompt."""
        return await self._client.post("/images/generations", request)

    async def create_edit(
        self,
        image: FileInput,
        prompt: str,
        *,
        mask: Optional[FileInput] = None,
        **fields: Any,
    ) -> Dict[str, Any]:
        """Edit ``image`` according to ``prompt``; transparent ``mask`` areas are repainted.

        Extra keyword arguments (``n``, ``size``, ``response_format``,
        ``user``) become form fields; ``None`` values are dropped.
        """
        files = {"image": as_file(image)}
        if mask is not None:
            files["mask"] = as_file(mask)
        form = MultipartForm.build(files, prompt=prompt, **fields)
        return await self._client.post_form("/images/edits", form)

    async def create_variation(self, image: FileInput, **fields: Any) -> Dict[str, Any]:
        form = MultipartForm.build({"image": as_file(image)}, **fields)
        return await self._client.post_form("/images/variations", form)


__all__ = ["Images"]
