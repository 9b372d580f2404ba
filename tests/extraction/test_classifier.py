from __future__ import annotations

import pytest

from projecteval.extraction import classify_file


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("notes.txt", "text"),
        ("README.md", "text"),
        ("budget.CSV", "csv"),
        ("data.json", "json"),
        ("feed.xml", "xml"),
        ("plan.pdf", "pdf"),
        ("plan.docx", "docx"),
        ("legacy.doc", "doc"),
        ("sheet.xlsx", "xlsx"),
        ("old.xls", "xls"),
        ("photo.JPEG", "image"),
        ("logo.webp", "image"),
    ],
)
def test_classify_known_extensions(name: str, expected: str) -> None:
    assert classify_file(name) == expected


@pytest.mark.parametrize("name", ["archive.zip", "Makefile", "", ".env", "folder.d/file", "trailing."])
def test_classify_unknown_or_missing_extension(name: str) -> None:
    assert classify_file(name) == "unknown"


def test_classify_uses_last_extension_only() -> None:
    assert classify_file("report.pdf.zip") == "unknown"
    assert classify_file("archive.tar.json") == "json"
