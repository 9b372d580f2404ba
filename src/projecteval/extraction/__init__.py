"""Content extraction pipeline for uploaded attachments."""

from __future__ import annotations

from .aggregator import ExtractionAggregator, render_file_contents
from .classifier import classify_file
from .extractors import extract_content, should_extract_content
from .pdf import scan_pdf_text
from .storage import LocalStorageReader, StorageReader

__all__ = [
    "ExtractionAggregator",
    "LocalStorageReader",
    "StorageReader",
    "classify_file",
    "extract_content",
    "render_file_contents",
    "scan_pdf_text",
    "should_extract_content",
]
