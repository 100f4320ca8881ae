"""Typed model of SIP headers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from ..method import Method
from ..scan import F32_MAX, LANGUAGE_TOKEN, MEDIA_TOKEN, SPACE, TOKEN, U32_MAX
from .content import ContentType, Language, Unrecognized, lookup_token
from .named import NamedHeader


class HeaderKind(Enum):
    """Every recognized header; the value is the wire tag."""

    ACCEPT = "Accept"
    ACCEPT_ENCODING = "Accept-Encoding"
    ACCEPT_LANGUAGE = "Accept-Language"
    ALERT_INFO = "Alert-Info"
    ALLOW = "Allow"
    AUTHENTICATION_INFO = "Authentication-Info"
    AUTHORIZATION = "Authorization"
    CALL_ID = "Call-ID"
    CALL_INFO = "Call-Info"
    CONTACT = "Contact"
    CONTENT_DISPOSITION = "Content-Disposition"
    CONTENT_ENCODING = "Content-Encoding"
    CONTENT_LANGUAGE = "Content-Language"
    CONTENT_LENGTH = "Content-Length"
    CONTENT_TYPE = "Content-Type"
    CSEQ = "CSeq"
    DATE = "Date"
    ERROR_INFO = "Error-Info"
    EXPIRES = "Expires"
    FROM = "From"
    IN_REPLY_TO = "In-Reply-To"
    MAX_FORWARDS = "Max-Forwards"
    MIME_VERSION = "MIME-Version"
    MIN_EXPIRES = "Min-Expires"
    ORGANIZATION = "Organization"
    PRIORITY = "Priority"
    PROXY_AUTHENTICATE = "Proxy-Authenticate"
    PROXY_AUTHORIZATION = "Proxy-Authorization"
    PROXY_REQUIRE = "Proxy-Require"
    RECORD_ROUTE = "Record-Route"
    REPLY_TO = "Reply-To"
    REQUIRE = "Require"
    RETRY_AFTER = "Retry-After"
    ROUTE = "Route"
    SERVER = "Server"
    SUBJECT = "Subject"
    SUPPORTED = "Supported"
    TIMESTAMP = "Timestamp"
    TO = "To"
    UNSUPPORTED = "Unsupported"
    USER_AGENT = "User-Agent"
    VIA = "Via"
    WARNING = "Warning"
    WWW_AUTHENTICATE = "WWW-Authenticate"
    OTHER = "Other"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def shape(self) -> "Shape":
        return SHAPES[self]


class Shape(Enum):
    NUMERIC = "numeric"
    REAL = "real"
    TEXT = "text"
    METHOD_LIST = "method-list"
    WORD_LIST = "word-list"
    NAMED = "named"
    CONTENT_TYPE = "content-type"
    LANGUAGE = "language"
    CSEQ = "cseq"
    OPAQUE = "opaque"


_SHAPE_MEMBERS = {
    Shape.NUMERIC: (
        HeaderKind.CONTENT_LENGTH,
        HeaderKind.EXPIRES,
        HeaderKind.MAX_FORWARDS,
        HeaderKind.MIN_EXPIRES,
        HeaderKind.TIMESTAMP,
    ),
    Shape.REAL: (HeaderKind.MIME_VERSION,),
    Shape.METHOD_LIST: (HeaderKind.ACCEPT, HeaderKind.ALLOW),
    Shape.WORD_LIST: (HeaderKind.SUPPORTED,),
    Shape.NAMED: (
        HeaderKind.CONTACT,
        HeaderKind.FROM,
        HeaderKind.REPLY_TO,
        HeaderKind.TO,
    ),
    Shape.CONTENT_TYPE: (
        HeaderKind.ACCEPT_ENCODING,
        HeaderKind.CONTENT_ENCODING,
        HeaderKind.CONTENT_TYPE,
    ),
    Shape.LANGUAGE: (HeaderKind.ACCEPT_LANGUAGE, HeaderKind.CONTENT_LANGUAGE),
    Shape.CSEQ: (HeaderKind.CSEQ,),
    Shape.OPAQUE: (HeaderKind.OTHER,),
}

SHAPES: Dict[HeaderKind, Shape] = {
    kind: shape for shape, kinds in _SHAPE_MEMBERS.items() for kind in kinds
}
for _kind in HeaderKind:
    SHAPES.setdefault(_kind, Shape.TEXT)
del _kind


@dataclass(frozen=True)
class CSeq:
    number: int
    method: Method

    def __post_init__(self) -> None:
        _check_u32(self.number)
        if not isinstance(self.method, Method):
            raise TypeError(f"CSeq method must be a Method, got {self.method!r}")

    def __str__(self) -> str:
        return f"{self.number} {self.method.value}"


@dataclass(frozen=True)
class Header:
    """One header line.

    ``value`` depends on ``kind.shape``: an ``int`` for numeric headers, a
    ``float`` for MIME-Version, a ``str`` for free text, a tuple of
    :class:`Method` or of words for lists, a :class:`NamedHeader`, a
    :class:`ContentType`/:class:`Language` (or :class:`Unrecognized`), a
    :class:`CSeq`, or a ``(name, value)`` pair for ``Other``.

    Headers are immutable; lists passed in are stored as tuples.
    """

    kind: HeaderKind
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _VALIDATORS[self.kind.shape](self.value))

    @classmethod
    def other(cls, name: str, value: str) -> "Header":
        return cls(HeaderKind.OTHER, (name, value))

    @property
    def name(self) -> str:
        if self.kind is HeaderKind.OTHER:
            return self.value[0]
        return self.kind.tag

    @property
    def shape(self) -> Shape:
        return self.kind.shape

    def __str__(self) -> str:
        from .write import write_header

        return write_header(self)


def _check_u32(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an integer, got {value!r}")
    if not 0 <= value <= U32_MAX:
        raise ValueError(f"{value} is outside the unsigned 32-bit range")
    return value


def _check_real(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Expected a number, got {value!r}")
    value = float(value)
    if not 0.0 <= value <= F32_MAX:
        raise ValueError(f"{value} is outside the non-negative 32-bit float range")
    return value


def _check_text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected a string, got {value!r}")
    if "\r" in value or "\n" in value:
        raise ValueError("Header text may not contain line breaks")
    # the grammar skips whitespace after the colon
    if value and ord(value[0]) in SPACE:
        raise ValueError(f"Header text may not start with whitespace: {value!r}")
    return value


def _check_methods(value: Any) -> Tuple[Method, ...]:
    methods = tuple(value)
    if not methods:
        raise ValueError("A method list needs at least one method")
    for method in methods:
        if not isinstance(method, Method):
            raise TypeError(f"Expected a Method, got {method!r}")
    return methods


def _check_words(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        raise TypeError("Expected a sequence of words, got a single string")
    words = tuple(value)
    if not words:
        raise ValueError("A word list needs at least one word")
    for word in words:
        if not isinstance(word, str) or not word or any(ord(ch) not in TOKEN for ch in word):
            raise ValueError(f"{word!r} is not a token")
    return words


def _check_named(value: Any) -> NamedHeader:
    if not isinstance(value, NamedHeader):
        raise TypeError(f"Expected a NamedHeader, got {value!r}")
    return value


def _typed_check(vocabulary: type, accepted: frozenset):
    def check(value: Any) -> Any:
        if not isinstance(value, (vocabulary, Unrecognized)):
            raise TypeError(f"Expected a {vocabulary.__name__}, got {value!r}")
        if isinstance(value, Unrecognized):
            token = value.token
            if any(ord(ch) not in accepted for ch in token):
                raise ValueError(f"{token!r} is not a valid {vocabulary.__name__} token")
            if lookup_token(vocabulary, token) is not None:
                raise ValueError(f"{token!r} is a known {vocabulary.__name__}; use the member")
        return value

    return check


def _check_cseq(value: Any) -> CSeq:
    if not isinstance(value, CSeq):
        raise TypeError(f"Expected a CSeq, got {value!r}")
    return value


def _check_opaque(value: Any) -> Tuple[str, str]:
    name, raw = value
    _check_text(raw)
    if not isinstance(name, str) or not name or any(ord(ch) not in TOKEN for ch in name):
        raise ValueError(f"{name!r} is not a valid header name")
    if name in _REGISTERED_TAGS:
        raise ValueError(f"{name} has its own grammar; build Header(HeaderKind, value) instead")
    return name, raw


_REGISTERED_TAGS = frozenset(kind.tag for kind in HeaderKind if kind is not HeaderKind.OTHER)


_VALIDATORS = {
    Shape.NUMERIC: _check_u32,
    Shape.REAL: _check_real,
    Shape.TEXT: _check_text,
    Shape.METHOD_LIST: _check_methods,
    Shape.WORD_LIST: _check_words,
    Shape.NAMED: _check_named,
    Shape.CONTENT_TYPE: _typed_check(ContentType, MEDIA_TOKEN),
    Shape.LANGUAGE: _typed_check(Language, LANGUAGE_TOKEN),
    Shape.CSEQ: _check_cseq,
    Shape.OPAQUE: _check_opaque,
}


__all__ = ["HeaderKind", "Shape", "SHAPES", "CSeq", "Header"]
