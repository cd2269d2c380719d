# SPDX-License-Identifier: Apache-2.0
"""Normalization of file inputs for the image and OCR endpoints.

A file may be given as a filesystem path, raw bytes, a readable binary
object, or an explicit FileUpload. Each variant has its own resolver and
all of them produce a ResolvedFile ready for a multipart upload.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import singledispatch
from pathlib import Path
from typing import BinaryIO, Union

DEFAULT_FILENAME = "image.png"
DEFAULT_CONTENT_TYPE = "image/png"
FALLBACK_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "bmp": "image/bmp",
    "tiff": "image/tiff",
    "pdf": "application/pdf",
}


@dataclass(frozen=True)
class FileUpload:
    """Explicit file payload.

    Attributes:
        data: File contents.
        filename: Name sent with the upload.
        content_type: MIME type. Inferred from the filename if omitted.
    """

    data: bytes
    filename: str
    content_type: str | None = None


@dataclass(frozen=True)
class ResolvedFile:
    """Canonical form of a file input."""

    data: bytes
    filename: str
    content_type: str


FileInput = Union[str, os.PathLike, bytes, bytearray, memoryview, BinaryIO, FileUpload]


def guess_content_type(filename: str) -> str:
    """Infer a MIME type from a filename extension.

    Args:
        filename: File name or path.

    Returns:
        MIME type, or application/octet-stream for unknown extensions.
    """
    _, dot, ext = filename.rpartition(".")
    if not dot:
        return FALLBACK_CONTENT_TYPE
    return CONTENT_TYPES.get(ext.lower(), FALLBACK_CONTENT_TYPE)


@singledispatch
def resolve_file(file_input: object) -> ResolvedFile:
    """Resolve a file input to bytes, filename and content type.

    Objects without a dedicated resolver are treated as readable blobs.
    A blob may declare its MIME type through a ``content_type`` attribute.

    Args:
        file_input: Path, bytes, readable binary object or FileUpload.

    Returns:
        Resolved file.

    Raises:
        OSError: If a path cannot be read.
        TypeError: If the input is not a supported file variant.
    """
    read = getattr(file_input, "read", None)
    if not callable(read):
        raise TypeError(
            f"Unsupported file input type: {type(file_input).__name__}"
        )
    data = read()
    if isinstance(data, str):
        raise TypeError("File objects must be opened in binary mode")
    content_type = getattr(file_input, "content_type", None) or DEFAULT_CONTENT_TYPE
    return ResolvedFile(bytes(data), DEFAULT_FILENAME, content_type)


@resolve_file.register(str)
@resolve_file.register(os.PathLike)
def _resolve_path(file_input: str | os.PathLike[str]) -> ResolvedFile:
    path = Path(file_input)
    data = path.read_bytes()
    return ResolvedFile(data, path.name, guess_content_type(path.name))


@resolve_file.register(bytes)
@resolve_file.register(bytearray)
@resolve_file.register(memoryview)
def _resolve_bytes(file_input: bytes | bytearray | memoryview) -> ResolvedFile:
    # Raw bytes carry no metadata
    return ResolvedFile(bytes(file_input), DEFAULT_FILENAME, DEFAULT_CONTENT_TYPE)


@resolve_file.register(FileUpload)
def _resolve_upload(file_input: FileUpload) -> ResolvedFile:
    content_type = file_input.content_type or guess_content_type(file_input.filename)
    return ResolvedFile(bytes(file_input.data), file_input.filename, content_type)
