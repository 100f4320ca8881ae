"""Typed SIP header model, grammars and serializer."""

from __future__ import annotations

from .container import Headers
from .content import ContentType, Language, Unrecognized
from .dispatch import GRAMMARS, HeaderGrammar, grammar_for, parse_header, parse_headers
from .model import SHAPES, CSeq, Header, HeaderKind, Shape
from .named import NamedHeader
from .write import write_header, write_headers

__all__ = [
    "Header",
    "HeaderKind",
    "Shape",
    "SHAPES",
    "CSeq",
    "NamedHeader",
    "ContentType",
    "Language",
    "Unrecognized",
    "Headers",
    "HeaderGrammar",
    "GRAMMARS",
    "grammar_for",
    "parse_header",
    "parse_headers",
    "write_header",
    "write_headers",
]
