"""Byte-level scanning primitives shared by the SIP grammars.

Every function takes the input buffer and an offset and returns the new
offset (plus whatever it captured). Failures raise :class:`GrammarMismatch`
and never advance the caller's offset.
"""

from __future__ import annotations

import string
from typing import Callable, FrozenSet, Tuple

from .errors import FormatError, GrammarMismatch, NumericOverflow

CRLF = b"\r\n"
U32_MAX = 0xFFFFFFFF
F32_MAX = 3.4028234663852886e38


def charset(chars: str) -> FrozenSet[int]:
    return frozenset(chars.encode("ascii"))


SPACE = charset(" \t")
DIGIT = charset(string.digits)
ALPHA = charset(string.ascii_letters)
ALPHANUMERIC = ALPHA | DIGIT
UPPER = charset(string.ascii_uppercase)
# RFC 3261 token characters, plus "/" for media types.
TOKEN = ALPHANUMERIC | charset("-.!%*_+`'~")
MEDIA_TOKEN = TOKEN | charset("/")
LANGUAGE_TOKEN = ALPHA | charset("-")


def take_while(data: bytes, offset: int, accepted: FrozenSet[int]) -> Tuple[bytes, int]:
    end = offset
    size = len(data)
    while end < size and data[end] in accepted:
        end += 1
    return data[offset:end], end


def take_while1(
    data: bytes, offset: int, accepted: FrozenSet[int], what: str
) -> Tuple[bytes, int]:
    value, end = take_while(data, offset, accepted)
    if not value:
        raise GrammarMismatch(f"Expected {what}", offset)
    return value, end


def take_until(data: bytes, offset: int, terminator: bytes = CRLF) -> Tuple[bytes, int]:
    end = data.find(terminator, offset)
    if end < 0:
        raise GrammarMismatch(f"Missing {terminator!r}", offset)
    return data[offset:end], end


def skip_space(data: bytes, offset: int) -> int:
    return take_while(data, offset, SPACE)[1]


def expect(data: bytes, offset: int, literal: bytes) -> int:
    if not data.startswith(literal, offset):
        raise GrammarMismatch(f"Expected {literal!r}", offset)
    return offset + len(literal)


def attempt(
    parser: Callable[[bytes, int], Tuple[object, int]], data: bytes, offset: int
) -> Tuple[object, int]:
    """Run *parser*; on mismatch return ``(None, offset)`` unchanged."""
    try:
        return parser(data, offset)
    except GrammarMismatch:
        return None, offset


def to_u32(raw: bytes) -> int:
    if len(raw.lstrip(b"0")) > 10 or int(raw) > U32_MAX:
        raise NumericOverflow(f"{raw.decode('ascii')} does not fit in 32 bits")
    return int(raw)


def to_f32(raw: bytes) -> float:
    try:
        value = float(raw.decode("ascii"))
    except ValueError as exc:
        raise FormatError(f"{raw!r} is not a decimal number") from exc
    if value > F32_MAX:
        raise NumericOverflow(f"{raw.decode('ascii')} does not fit in a 32-bit float")
    return value


def to_text(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(f"Header value is not valid UTF-8: {raw!r}") from exc


__all__ = [
    "CRLF",
    "U32_MAX",
    "F32_MAX",
    "charset",
    "SPACE",
    "DIGIT",
    "ALPHA",
    "ALPHANUMERIC",
    "UPPER",
    "TOKEN",
    "MEDIA_TOKEN",
    "LANGUAGE_TOKEN",
    "take_while",
    "take_while1",
    "take_until",
    "skip_space",
    "expect",
    "attempt",
    "to_u32",
    "to_f32",
    "to_text",
]
