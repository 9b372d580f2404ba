from __future__ import annotations

import pytest

import projecteval.extraction.extractors as extractors
from projecteval.extraction import extract_content, should_extract_content


def test_text_is_decoded_and_trimmed() -> None:
    assert extract_content("text", "  line one\nline two \n\n".encode("utf-8"), "a.txt") == "line one\nline two"


@pytest.mark.parametrize("file_type", ["csv", "json", "xml"])
def test_structured_text_types_are_returned_verbatim(file_type: str) -> None:
    assert extract_content(file_type, b'{"a": 1}', f"data.{file_type}") == '{"a": 1}'


def test_invalid_utf8_text_returns_placeholder() -> None:
    assert extract_content("text", b"\xff\xfe\xfa", "bad.txt") == extractors.TEXT_READ_ERROR


def test_pdf_literals_are_extracted() -> None:
    content = extract_content("pdf", b"%PDF-1.4 (Hello) Tj (World) Tj", "plan.pdf")

    assert content == "Hello World"


def test_pdf_without_literals_returns_limited_placeholder() -> None:
    assert extract_content("pdf", b"%PDF-1.4 stream x\x9c endstream", "scan.pdf") == extractors.PDF_LIMITED


def test_pdf_scan_failure_returns_error_placeholder(monkeypatch: pytest.MonkeyPatch) -> None:
    def boom(data: bytes) -> str:
        raise ValueError("corrupt")

    monkeypatch.setattr(extractors, "scan_pdf_text", boom)

    assert extract_content("pdf", b"%PDF", "enc.pdf") == extractors.PDF_ERROR


@pytest.mark.parametrize(("file_type", "label"), [("doc", "Word document"), ("docx", "Word document"), ("xls", "Excel file"), ("xlsx", "Excel file")])
def test_office_formats_return_named_placeholder(file_type: str, label: str) -> None:
    content = extract_content(file_type, b"PK\x03\x04", f"plan.{file_type}")

    assert f"[{label}: plan.{file_type}]" in content


def test_image_placeholder_mentions_visual_analysis() -> None:
    content = extract_content("image", b"\x89PNG", "logo.png")

    assert content.startswith("[Image: logo.png]")
    assert "Visual analysis is not available" in content


def test_unknown_placeholder_names_type_and_file() -> None:
    assert extract_content("unknown", b"", "archive.zip").startswith("[UNKNOWN file: archive.zip]")


def test_should_extract_content() -> None:
    assert should_extract_content("pdf")
    assert should_extract_content("csv")
    assert not should_extract_content("docx")
    assert not should_extract_content("image")
