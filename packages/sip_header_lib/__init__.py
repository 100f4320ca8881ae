"""Parse SIP header lines into typed values and write them back."""

from __future__ import annotations

from .config import DEFAULT_CONFIG, STRICT_CONFIG, ParserConfig
from .errors import (
    FormatError,
    GrammarMismatch,
    HeaderAbsent,
    NoMatchingHeader,
    NumericOverflow,
    SIPParseError,
    ValueConversionError,
    VocabularyMiss,
)
from .headers import (
    GRAMMARS,
    SHAPES,
    ContentType,
    CSeq,
    Header,
    HeaderGrammar,
    HeaderKind,
    Headers,
    Language,
    NamedHeader,
    Shape,
    Unrecognized,
    grammar_for,
    parse_header,
    parse_headers,
    write_header,
    write_headers,
)
from .method import Method, parse_method
from .uri import Scheme, Uri, parse_uri

__all__ = [
    "ParserConfig",
    "DEFAULT_CONFIG",
    "STRICT_CONFIG",
    "SIPParseError",
    "GrammarMismatch",
    "VocabularyMiss",
    "NoMatchingHeader",
    "ValueConversionError",
    "NumericOverflow",
    "FormatError",
    "HeaderAbsent",
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
    "Method",
    "parse_method",
    "Scheme",
    "Uri",
    "parse_uri",
]
