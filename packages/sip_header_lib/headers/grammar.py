"""Per-shape header grammars.

Each factory takes a :class:`HeaderKind` and returns a parser with the
signature ``parse(data, offset=0, *, config=DEFAULT_CONFIG)`` that yields a
``(Header, offset)`` pair with the offset just past the ``\\r\\n``
terminator. The tag is matched literally and must be followed by optional
whitespace and a colon, so ``Accept`` never consumes ``Accept-Encoding``.
"""

from __future__ import annotations

from typing import Any, Callable, List, Tuple, Type, Union

from ..config import DEFAULT_CONFIG, ParserConfig
from ..errors import GrammarMismatch, VocabularyMiss
from ..method import parse_method
from ..scan import (
    CRLF,
    DIGIT,
    LANGUAGE_TOKEN,
    MEDIA_TOKEN,
    TOKEN,
    expect,
    skip_space,
    take_until,
    take_while,
    take_while1,
    to_f32,
    to_text,
    to_u32,
)
from .content import ContentType, Language, Unrecognized, lookup_token
from .model import CSeq, Header, HeaderKind
from .named import parse_named_header

FieldParser = Callable[..., Tuple[Header, int]]
ValueParser = Callable[[bytes, int, ParserConfig], Tuple[Any, int]]


def parse_field_start(tag: bytes, data: bytes, offset: int) -> int:
    """Match ``tag *WSP ":" *WSP`` and return the offset of the value."""
    pos = expect(data, offset, tag)
    pos = skip_space(data, pos)
    pos = expect(data, pos, b":")
    return skip_space(data, pos)


def _field(kind: HeaderKind, value_parser: ValueParser) -> FieldParser:
    tag = kind.tag.encode("ascii")

    def parse(
        data: bytes, offset: int = 0, *, config: ParserConfig = DEFAULT_CONFIG
    ) -> Tuple[Header, int]:
        pos = parse_field_start(tag, data, offset)
        value, pos = value_parser(data, pos, config)
        pos = expect(data, pos, CRLF)
        return Header(kind, value), pos

    parse.__name__ = f"parse_{kind.name.lower()}_header"
    parse.__qualname__ = parse.__name__
    return parse


def _u32_value(data: bytes, offset: int, config: ParserConfig) -> Tuple[int, int]:
    digits, pos = take_while1(data, offset, DIGIT, "digits")
    return to_u32(digits), pos


def _f32_value(data: bytes, offset: int, config: ParserConfig) -> Tuple[float, int]:
    _, pos = take_while1(data, offset, DIGIT, "digits")
    if data.startswith(b".", pos):
        _, pos = take_while1(data, pos + 1, DIGIT, "fraction digits")
    return to_f32(data[offset:pos]), pos


def _text_value(data: bytes, offset: int, config: ParserConfig) -> Tuple[str, int]:
    raw, pos = take_until(data, offset, CRLF)
    if b"\r" in raw or b"\n" in raw:
        raise GrammarMismatch("Bare line break inside header value", offset)
    return to_text(raw), pos


def _list_value(item: Callable[[bytes, int], Tuple[Any, int]]) -> ValueParser:
    def parse(data: bytes, offset: int, config: ParserConfig) -> Tuple[List[Any], int]:
        value, pos = item(data, offset)
        items = [value]
        while data.startswith(b",", pos):
            pos += 1
            if data.startswith(b" ", pos):
                pos += 1
            value, pos = item(data, pos)
            items.append(value)
        return items, pos

    return parse


def parse_word(data: bytes, offset: int) -> Tuple[str, int]:
    word, pos = take_while1(data, offset, TOKEN, "word")
    return word.decode("ascii"), pos


def _typed_value(
    vocabulary: Type[Union[ContentType, Language]], accepted: frozenset
) -> ValueParser:
    def parse(data: bytes, offset: int, config: ParserConfig) -> Tuple[Any, int]:
        raw, pos = take_while1(data, offset, accepted, f"{vocabulary.__name__} token")
        token = raw.decode("ascii")
        value = lookup_token(vocabulary, token)
        if value is None:
            if config.strict_vocabulary:
                raise VocabularyMiss(vocabulary.__name__, token, offset)
            value = Unrecognized(token)
        return value, skip_space(data, pos)

    return parse


def _named_value(data: bytes, offset: int, config: ParserConfig) -> Tuple[Any, int]:
    return parse_named_header(data, offset)


def _cseq_value(data: bytes, offset: int, config: ParserConfig) -> Tuple[CSeq, int]:
    number, pos = _u32_value(data, offset, config)
    pos = skip_space(data, pos)
    method, pos = parse_method(data, pos)
    return CSeq(number, method), pos


def numeric_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _u32_value)


def real_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _f32_value)


def text_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _text_value)


def method_list_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _list_value(parse_method))


def word_list_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _list_value(parse_word))


def named_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _named_value)


def content_type_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _typed_value(ContentType, MEDIA_TOKEN))


def language_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _typed_value(Language, LANGUAGE_TOKEN))


def cseq_field(kind: HeaderKind) -> FieldParser:
    return _field(kind, _cseq_value)


def parse_other_header(
    data: bytes, offset: int = 0, *, config: ParserConfig = DEFAULT_CONFIG
) -> Tuple[Header, int]:
    """Capture any ``name: value`` line verbatim as an ``Other`` header."""
    name, pos = take_while1(data, offset, TOKEN, "header name")
    pos = skip_space(data, pos)
    pos = expect(data, pos, b":")
    pos = skip_space(data, pos)
    value, pos = _text_value(data, pos, config)
    pos = expect(data, pos, CRLF)
    return Header.other(name.decode("ascii"), value), pos


def split_tag(data: bytes, offset: int = 0) -> bytes:
    """Return the header name at *offset*, or ``b""`` when there is none."""
    return take_while(data, offset, TOKEN)[0]


__all__ = [
    "FieldParser",
    "parse_field_start",
    "parse_word",
    "numeric_field",
    "real_field",
    "text_field",
    "method_list_field",
    "word_list_field",
    "named_field",
    "content_type_field",
    "language_field",
    "cseq_field",
    "parse_other_header",
    "split_tag",
]
