"""Best-effort text scanner for raw PDF bytes.

Only literal strings (``(...)``) are collected; compressed content streams,
hex strings and font encodings are not interpreted.
"""

from __future__ import annotations

_OPEN = 0x28
_CLOSE = 0x29
_BACKSLASH = 0x5C

_ESCAPES: dict[int, bytes] = {
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
    ord("b"): b"\b",
    ord("f"): b"\f",
    _OPEN: b"(",
    _CLOSE: b")",
    _BACKSLASH: b"\\",
}

_OCTAL_DIGITS = frozenset(b"01234567")


def scan_pdf_text(data: bytes) -> str:
    """Return the literal strings of a PDF byte stream joined by spaces.

    An opening parenthesis without a match before the end of input is
    skipped; complete literals found after it are still returned, in order.
    Returns an empty string when nothing readable is found.
    """

    chunks: list[str] = []
    buffer = bytearray()
    # open literals: offset of their content in ``buffer`` and the spans of
    # the complete literals directly nested in them
    frames: list[tuple[int, list[tuple[int, int]]]] = []
    index = 0
    length = len(data)
    while index < length:
        byte = data[index]
        if not frames:
            if byte == _OPEN:
                frames.append((0, []))
            index += 1
            continue
        if byte == _BACKSLASH:
            index = _read_escape(data, index + 1, buffer)
            continue
        if byte == _OPEN:
            buffer.append(byte)
            frames.append((len(buffer), []))
        elif byte == _CLOSE:
            start, _ = frames.pop()
            if frames:
                frames[-1][1].append((start, len(buffer)))
                buffer.append(byte)
            else:
                _add_chunk(chunks, buffer)
                buffer.clear()
        else:
            buffer.append(byte)
        index += 1

    for _, spans in frames:
        for start, end in spans:
            _add_chunk(chunks, buffer[start:end])
    return " ".join(chunks)


def _add_chunk(chunks: list[str], raw: bytes | bytearray) -> None:
    text = bytes(raw).decode("utf-8", errors="replace").strip()
    if text:
        chunks.append(text)


def _read_escape(data: bytes, index: int, buffer: bytearray) -> int:
    if index >= len(data):
        return index
    byte = data[index]
    if byte in _ESCAPES:
        buffer.extend(_ESCAPES[byte])
        return index + 1
    if byte in _OCTAL_DIGITS:
        end = index
        while end < len(data) and end - index < 3 and data[end] in _OCTAL_DIGITS:
            end += 1
        buffer.append(int(data[index:end], 8) & 0xFF)
        return end
    if byte == 0x0D:
        # line continuation, CRLF or CR
        if index + 1 < len(data) and data[index + 1] == 0x0A:
            return index + 2
        return index + 1
    if byte == 0x0A:
        return index + 1
    # unknown escapes keep the character and drop the backslash
    buffer.append(byte)
    return index + 1


__all__ = ["scan_pdf_text"]
