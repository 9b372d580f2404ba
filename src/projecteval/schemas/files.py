"""File reference and extraction result schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

FileType = Literal[
    "text",
    "csv",
    "json",
    "xml",
    "pdf",
    "doc",
    "docx",
    "xls",
    "xlsx",
    "image",
    "unknown",
]


class FileRef(BaseModel):
    """Reference to a stored blob owned by the caller."""

    path: str
    name: str

    model_config = ConfigDict(extra="ignore", frozen=True)


class FileContent(BaseModel):
    """Text extracted from one attached file."""

    file_name: str
    file_type: FileType
    content: str = ""
    extracted_successfully: bool = True
    error: str | None = None

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
