"""Render header values back to wire text."""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, Dict, Iterable

from ..scan import CRLF
from .model import Header, Shape
from .named import write_named_header


def write_real(value: float) -> str:
    """Render *value* in plain decimal notation with a fractional part.

    The digits are those of ``repr(value)``, so the text parses back to the
    same float.
    """
    text = format(Decimal(repr(value)), "f")
    if "." not in text:
        text += ".0"
    return text


def _write_list(value: Iterable[object]) -> str:
    return ",".join(str(item) for item in value)


_WRITERS: Dict[Shape, Callable[[object], str]] = {
    Shape.NUMERIC: str,
    Shape.REAL: write_real,  # type: ignore[dict-item]
    Shape.TEXT: str,
    Shape.METHOD_LIST: _write_list,  # type: ignore[dict-item]
    Shape.WORD_LIST: _write_list,  # type: ignore[dict-item]
    Shape.NAMED: write_named_header,  # type: ignore[dict-item]
    Shape.CONTENT_TYPE: str,
    Shape.LANGUAGE: str,
    Shape.CSEQ: str,
}


def write_value(header: Header) -> str:
    """Render only the part after ``Tag: ``."""
    if header.shape is Shape.OPAQUE:
        return header.value[1]
    return _WRITERS[header.shape](header.value)


def write_header(header: Header) -> str:
    """Render ``Tag: value`` without the line terminator."""
    return f"{header.name}: {write_value(header)}"


def write_headers(headers: Iterable[Header]) -> str:
    """Render every header in order, each followed by ``\\r\\n``."""
    terminator = CRLF.decode("ascii")
    return "".join(write_header(header) + terminator for header in headers)


__all__ = ["write_real", "write_value", "write_header", "write_headers"]
