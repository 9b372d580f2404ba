from __future__ import annotations

from projecteval.extraction import scan_pdf_text


def test_scan_collects_literals_in_order() -> None:
    data = b"%PDF-1.4\nBT /F1 12 Tf (Hello) Tj ET\nBT (World) Tj ET\n%%EOF"

    assert scan_pdf_text(data) == "Hello World"


def test_scan_returns_empty_string_without_literals() -> None:
    assert scan_pdf_text(b"%PDF-1.7\n1 0 obj << /Type /Catalog >> endobj") == ""
    assert scan_pdf_text(b"") == ""


def test_scan_skips_blank_literals() -> None:
    assert scan_pdf_text(b"() (   ) (Text)") == "Text"


def test_scan_keeps_balanced_nested_parentheses() -> None:
    assert scan_pdf_text(b"(Budget (draft) v2)") == "Budget (draft) v2"


def test_scan_honours_escaped_parentheses() -> None:
    assert scan_pdf_text(rb"(a \) b \( c)") == "a ) b ( c"


def test_scan_decodes_octal_and_backslash_escapes() -> None:
    assert scan_pdf_text(rb"(caf\351) (x\\y) (A\101)") == "caf� x\\y AA"


def test_scan_line_continuation_joins_lines() -> None:
    assert scan_pdf_text(b"(split \\\nline)") == "split line"
    assert scan_pdf_text(b"(split \\\r\nline)") == "split line"


def test_scan_skips_unterminated_literal() -> None:
    assert scan_pdf_text(b"(First) (never closed") == "First"


def test_scan_recovers_literals_after_stray_open_parenthesis() -> None:
    data = b"stream x\x28\x9c\x01 endstream\nBT (Hello) Tj (World) Tj ET"

    assert scan_pdf_text(data) == "Hello World"


def test_scan_recovers_literals_inside_nested_unterminated_runs() -> None:
    assert scan_pdf_text(b"(a (b (Budget (draft) v2) tail") == "Budget (draft) v2"
    assert scan_pdf_text(b"(x (One) y (z (Two) (Three)") == "One Two Three"


def test_scan_handles_trailing_backslash() -> None:
    assert scan_pdf_text(b"(ok) (broken \\") == "ok"


def test_scan_replaces_invalid_utf8() -> None:
    result = scan_pdf_text(b"(\xff\xfeabc)")

    assert result.endswith("abc")
    assert "�" in result
