"""Concurrent extraction over a batch of attachments and prompt rendering."""

from __future__ import annotations

import asyncio
from typing import Iterable, Sequence

import structlog

from ..schemas import FileContent, FileRef
from .classifier import classify_file
from .extractors import extract_content
from .storage import StorageReader

DEFAULT_MAX_CHARS = 4000

HEADER = "=== CONTENT OF ATTACHED FILES ==="
FOOTER = "=== END OF ATTACHED FILES ==="
EMPTY_MARKER = "[empty or non-extractable]"


class ExtractionAggregator:
    """Fetch, classify and extract every attachment of an evaluation."""

    def __init__(self, reader: StorageReader, *, max_chars: int = DEFAULT_MAX_CHARS) -> None:
        self._reader = reader
        self._max_chars = max_chars
        self._logger = structlog.get_logger(__name__)

    async def extract_file(self, ref: FileRef) -> FileContent:
        file_type = classify_file(ref.name)
        try:
            data = await self._reader.read(ref)
        except Exception as exc:  # noqa: BLE001
            self._logger.warning(
                "extraction.file_failed",
                file_name=ref.name,
                path=ref.path,
                error=str(exc),
            )
            return FileContent(
                file_name=ref.name,
                file_type=file_type,
                content="",
                extracted_successfully=False,
                error=f"Download error: {exc}",
            )

        content = extract_content(file_type, data, ref.name)
        return FileContent(
            file_name=ref.name,
            file_type=file_type,
            content=content,
            extracted_successfully=True,
        )

    async def extract_all(self, refs: Iterable[FileRef]) -> list[FileContent]:
        """Extract all files concurrently, preserving input order."""
        refs = list(refs)
        if not refs:
            return []
        contents = await asyncio.gather(*(self.extract_file(ref) for ref in refs))
        self._logger.info(
            "extraction.completed",
            file_count=len(contents),
            failed=sum(1 for item in contents if not item.extracted_successfully),
        )
        return list(contents)

    def render(self, contents: Sequence[FileContent]) -> str:
        return render_file_contents(contents, max_chars=self._max_chars)


def render_file_contents(
    contents: Sequence[FileContent],
    *,
    max_chars: int = DEFAULT_MAX_CHARS,
) -> str:
    """Render extracted files as one delimited block for a prompt."""

    if not contents:
        return ""

    parts = [f"\n\n{HEADER}\n\n"]
    for index, item in enumerate(contents, start=1):
        parts.append(f"--- File {index}: {item.file_name} ({item.file_type.upper()}) ---\n")
        if not item.extracted_successfully:
            parts.append(f"[Extraction error: {item.error or 'unknown'}]\n\n")
        elif item.content:
            parts.append(_truncate(item.content, max_chars) + "\n\n")
        else:
            parts.append(f"{EMPTY_MARKER}\n\n")
    parts.append(f"{FOOTER}\n")
    return "".join(parts)


def _truncate(content: str, max_chars: int) -> str:
    if len(content) <= max_chars:
        return content
    return (
        content[:max_chars]
        + f"\n\n[...Content truncated. Total length: {len(content)} characters]"
    )


__all__ = [
    "DEFAULT_MAX_CHARS",
    "EMPTY_MARKER",
    "ExtractionAggregator",
    "FOOTER",
    "HEADER",
    "render_file_contents",
]
