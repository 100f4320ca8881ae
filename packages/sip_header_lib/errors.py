"""Exceptions raised by the SIP header grammar engine."""

from __future__ import annotations

from typing import Optional


class SIPParseError(ValueError):
    """Raised when wire text cannot be parsed as SIP."""


class GrammarMismatch(SIPParseError):
    """A literal, delimiter or character class expectation was not met."""

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        if offset is not None:
            message = f"{message} (at offset {offset})"
        super().__init__(message)
        self.offset = offset


class VocabularyMiss(GrammarMismatch):
    """A token was well formed but is not part of a closed vocabulary."""

    def __init__(self, vocabulary: str, token: str, offset: Optional[int] = None) -> None:
        super().__init__(f"Unrecognized {vocabulary} token {token!r}", offset)
        self.vocabulary = vocabulary
        self.token = token


class NoMatchingHeader(SIPParseError):
    """Every header grammar failed for a line."""

    def __init__(self, line: bytes) -> None:
        super().__init__(f"No header grammar matched this line: {line!r}")
        self.line = line


class ValueConversionError(SIPParseError):
    """The grammar matched but the captured value could not be converted."""


class NumericOverflow(ValueConversionError):
    pass


class FormatError(ValueConversionError):
    pass


class HeaderAbsent(LookupError):
    """A typed lookup found no header of the expected kind."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Message does not contain a {name} header")
        self.name = name


__all__ = [
    "SIPParseError",
    "GrammarMismatch",
    "VocabularyMiss",
    "NoMatchingHeader",
    "ValueConversionError",
    "NumericOverflow",
    "FormatError",
    "HeaderAbsent",
]
