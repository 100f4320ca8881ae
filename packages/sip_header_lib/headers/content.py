"""Closed vocabularies used by the typed header fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Type, TypeVar, Union


class ContentType(Enum):
    SDP = "application/sdp"
    PLAIN_TEXT = "text/plain"
    SMS = "application/vnd.3gpp.sms"
    SIPFRAG = "message/sipfrag"
    PIDF = "application/pidf+xml"

    def __str__(self) -> str:
        return self.value


class Language(Enum):
    ENGLISH = "en"
    GERMAN = "de"
    FRENCH = "fr"
    SPANISH = "es"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Unrecognized:
    """A well formed token outside the known vocabulary, kept verbatim."""

    token: str

    def __post_init__(self) -> None:
        if not self.token or any(ch.isspace() for ch in self.token):
            raise ValueError(f"Invalid vocabulary token {self.token!r}")

    @property
    def value(self) -> str:
        return self.token

    def __str__(self) -> str:
        return self.token


_E = TypeVar("_E", ContentType, Language)

TypedValue = Union[ContentType, Language, Unrecognized]


def lookup_token(vocabulary: Type[_E], token: str) -> Union[_E, None]:
    try:
        return vocabulary(token)
    except ValueError:
        return None


__all__ = ["ContentType", "Language", "Unrecognized", "TypedValue", "lookup_token"]
