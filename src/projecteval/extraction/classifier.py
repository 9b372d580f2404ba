"""Map file names to semantic type tags."""

from __future__ import annotations

from pathlib import PurePosixPath

from ..schemas import FileType

_EXTENSION_TYPES: dict[str, FileType] = {
    "txt": "text",
    "md": "text",
    "csv": "csv",
    "json": "json",
    "xml": "xml",
    "pdf": "pdf",
    "doc": "doc",
    "docx": "docx",
    "xls": "xls",
    "xlsx": "xlsx",
    "jpg": "image",
    "jpeg": "image",
    "png": "image",
    "gif": "image",
    "webp": "image",
}


def classify_file(file_name: str) -> FileType:
    """Return the type tag for ``file_name`` based on its extension."""
    suffix = PurePosixPath(file_name.replace("\\", "/")).suffix
    return _EXTENSION_TYPES.get(suffix[1:].lower(), "unknown")


__all__ = ["classify_file"]
