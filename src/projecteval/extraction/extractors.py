"""Per-type content extraction strategies.

Every strategy returns text; unsupported or unreadable formats degrade into a
descriptive placeholder instead of failing.
"""

from __future__ import annotations

from typing import Callable

import structlog

from ..schemas import FileType
from .pdf import scan_pdf_text

Extractor = Callable[[bytes, str], str]

TEXT_READ_ERROR = "[Error reading text file]"
PDF_LIMITED = (
    "[PDF detected - limited content extraction. For full content, use a "
    "dedicated PDF extraction tool]"
)
PDF_ERROR = "[Error extracting PDF content - non-standard or encrypted format]"

_EXTRACTABLE_TYPES: frozenset[str] = frozenset({"text", "csv", "json", "xml", "pdf"})

_logger = structlog.get_logger(__name__)


def extract_text(data: bytes, file_name: str) -> str:
    try:
        return data.decode("utf-8").strip()
    except UnicodeDecodeError:
        _logger.info("extraction.text_decode_failed", file_name=file_name)
        return TEXT_READ_ERROR


def extract_pdf(data: bytes, file_name: str) -> str:
    try:
        text = scan_pdf_text(data).strip()
    except Exception as exc:  # noqa: BLE001
        _logger.warning("extraction.pdf_scan_failed", file_name=file_name, error=str(exc))
        return PDF_ERROR
    return text or PDF_LIMITED


def extract_word(data: bytes, file_name: str) -> str:
    return (
        f"[Word document: {file_name}] - Word content extraction requires a "
        "dedicated library. The file was submitted and is available for manual review."
    )


def extract_excel(data: bytes, file_name: str) -> str:
    return (
        f"[Excel file: {file_name}] - Excel content extraction requires a "
        "dedicated library. The file was submitted and is available for manual review."
    )


def extract_image(data: bytes, file_name: str) -> str:
    return f"[Image: {file_name}] - Visual analysis is not available in this version"


def _unsupported(file_type: str) -> Extractor:
    def extract(data: bytes, file_name: str) -> str:
        return (
            f"[{file_type.upper()} file: {file_name}] - Content extraction is not "
            "supported for this file type"
        )

    return extract


EXTRACTORS: dict[str, Extractor] = {
    "text": extract_text,
    "csv": extract_text,
    "json": extract_text,
    "xml": extract_text,
    "pdf": extract_pdf,
    "doc": extract_word,
    "docx": extract_word,
    "xls": extract_excel,
    "xlsx": extract_excel,
    "image": extract_image,
}


def extract_content(file_type: FileType, data: bytes, file_name: str) -> str:
    """Extract text from ``data`` using the strategy registered for ``file_type``."""
    extractor = EXTRACTORS.get(file_type) or _unsupported(file_type)
    return extractor(data, file_name)


def should_extract_content(file_type: str) -> bool:
    """Return True when ``file_type`` yields real text rather than a placeholder."""
    return file_type in _EXTRACTABLE_TYPES


__all__ = [
    "EXTRACTORS",
    "PDF_ERROR",
    "PDF_LIMITED",
    "TEXT_READ_ERROR",
    "extract_content",
    "should_extract_content",
]
