"""DTOs shared by the request and response layers."""

from .error_envelope import ApiErrorBody, WrappedError
from .multipart import FileInput, FileSpec, MultipartForm, as_file, file_from_path

__all__ = [
    "ApiErrorBody",
    "WrappedError",
    "FileInput",
    "FileSpec",
    "MultipartForm",
    "as_file",
    "file_from_path",
]
