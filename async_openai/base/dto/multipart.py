"""
Multipart form payload used by binary upload endpoints.

A form always carries at least one file; without one ``httpx`` would encode
the fields as ``application/x-www-form-urlencoded`` instead of multipart.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional, Tuple, Union

FileContent = Union[bytes, IO[bytes]]
FileSpec = Tuple[str, FileContent, Optional[str]]


def file_from_path(path: Union[str, Path]) -> FileSpec:
    """Read ``path`` into a ``(filename, content, content_type)`` tuple."""
    p = Path(path)
    content_type, _ = mimetypes.guess_type(p.name)
    return (p.name, p.read_bytes(), content_type or "application/octet-stream")


FileInput = Union[str, Path, FileSpec]


def as_file(value: FileInput) -> FileSpec:
    """Accept either a filesystem path or an explicit ``FileSpec`` tuple."""
    if isinstance(value, (str, Path)):
        return file_from_path(value)
    return value


def _field_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class MultipartForm:
    """Text fields plus file parts for a ``multipart/form-data`` body."""

    files: Mapping[str, FileSpec]
    fields: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.files:
            raise ValueError("a multipart form needs at least one file part")

    @classmethod
    def build(cls, files: Mapping[str, FileSpec], **fields: Any) -> "MultipartForm":
        """Create a form, dropping ``None`` fields and stringifying the rest."""
        return cls(
            files=dict(files),
            fields={k: _field_value(v) for k, v in fields.items() if v is not None},
        )

    def httpx_files(self) -> Dict[str, FileSpec]:
        return dict(self.files)


__all__ = ["FileSpec", "FileInput", "MultipartForm", "as_file", "file_from_path"]
