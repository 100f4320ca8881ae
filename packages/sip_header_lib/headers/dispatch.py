"""Header registration table and dispatcher."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from ..config import DEFAULT_CONFIG, ParserConfig
from ..errors import GrammarMismatch, NoMatchingHeader
from ..scan import CRLF
from .container import Headers
from .grammar import (
    FieldParser,
    content_type_field,
    cseq_field,
    language_field,
    method_list_field,
    named_field,
    numeric_field,
    parse_other_header,
    real_field,
    split_tag,
    text_field,
    word_list_field,
)
from .model import SHAPES, Header, HeaderKind, Shape
from .write import write_header

logger = logging.getLogger(__name__)

_GRAMMAR_FACTORIES: Dict[Shape, Callable[[HeaderKind], FieldParser]] = {
    Shape.NUMERIC: numeric_field,
    Shape.REAL: real_field,
    Shape.TEXT: text_field,
    Shape.METHOD_LIST: method_list_field,
    Shape.WORD_LIST: word_list_field,
    Shape.NAMED: named_field,
    Shape.CONTENT_TYPE: content_type_field,
    Shape.LANGUAGE: language_field,
    Shape.CSEQ: cseq_field,
}


@dataclass(frozen=True)
class HeaderGrammar:
    kind: HeaderKind
    parse: FieldParser
    write: Callable[[Header], str]

    @property
    def tag(self) -> bytes:
        return self.kind.tag.encode("ascii")


GRAMMARS: Tuple[HeaderGrammar, ...] = tuple(
    HeaderGrammar(kind, _GRAMMAR_FACTORIES[SHAPES[kind]](kind), write_header)
    for kind in HeaderKind
    if SHAPES[kind] is not Shape.OPAQUE
)

_BY_KIND = {grammar.kind: grammar for grammar in GRAMMARS}
_KNOWN_TAGS = frozenset(grammar.tag for grammar in GRAMMARS)


def grammar_for(kind: HeaderKind) -> HeaderGrammar:
    try:
        return _BY_KIND[kind]
    except KeyError:
        raise KeyError(f"{kind.tag} has no dedicated grammar") from None


def parse_header(
    data: bytes, offset: int = 0, *, config: ParserConfig = DEFAULT_CONFIG
) -> Tuple[Header, int]:
    """Parse one CRLF terminated header line starting at *offset*.

    Grammars are tried in table order and the first one that consumes the
    whole line wins. Lines whose tag has no grammar become ``Other`` headers
    unless ``config.unknown_headers`` is ``"reject"``. A recognized tag whose
    value does not match is always an error.
    """
    tag = split_tag(data, offset)
    last_error: Optional[GrammarMismatch] = None
    for grammar in GRAMMARS:
        try:
            return grammar.parse(data, offset, config=config)
        except GrammarMismatch as exc:
            if grammar.tag == tag:
                last_error = exc
    line = _line_at(data, offset)
    if tag and tag not in _KNOWN_TAGS and config.keeps_unknown_headers:
        try:
            header, end = parse_other_header(data, offset, config=config)
        except GrammarMismatch as exc:
            raise NoMatchingHeader(line) from exc
        logger.debug("Keeping unrecognized header %s verbatim", header.name)
        return header, end
    raise NoMatchingHeader(line) from last_error


def parse_headers(
    data: bytes, offset: int = 0, *, config: ParserConfig = DEFAULT_CONFIG
) -> Tuple[Headers, int]:
    """Parse header lines until an empty line or the end of *data*.

    The returned offset points past the empty line when one was found.
    """
    headers = Headers()
    size = len(data)
    pos = offset
    while pos < size:
        if data.startswith(CRLF, pos):
            return headers, pos + len(CRLF)
        header, pos = parse_header(data, pos, config=config)
        headers.push(header)
    return headers, pos


def _line_at(data: bytes, offset: int) -> bytes:
    end = data.find(CRLF, offset)
    return data[offset:] if end < 0 else data[offset:end]


__all__ = ["HeaderGrammar", "GRAMMARS", "grammar_for", "parse_header", "parse_headers"]
