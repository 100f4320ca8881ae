"""Parser behaviour switches."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_AS_OTHER = "other"
UNKNOWN_REJECT = "reject"


@dataclass(frozen=True)
class ParserConfig:
    """Options accepted by every parse entry point through ``config=``.

    ``unknown_headers`` decides what happens to a line whose tag has no
    registered grammar: ``"other"`` keeps it as an opaque ``Other`` header,
    ``"reject"`` raises :class:`NoMatchingHeader`.

    ``strict_vocabulary`` makes an unrecognized Content-Type or language
    token fail the header instead of producing an ``Unrecognized`` value.
    """

    unknown_headers: str = UNKNOWN_AS_OTHER
    strict_vocabulary: bool = False

    def __post_init__(self) -> None:
        if self.unknown_headers not in (UNKNOWN_AS_OTHER, UNKNOWN_REJECT):
            raise ValueError(
                f"unknown_headers must be {UNKNOWN_AS_OTHER!r} or {UNKNOWN_REJECT!r}, "
                f"got {self.unknown_headers!r}"
            )

    @property
    def keeps_unknown_headers(self) -> bool:
        return self.unknown_headers == UNKNOWN_AS_OTHER


DEFAULT_CONFIG = ParserConfig()
STRICT_CONFIG = ParserConfig(unknown_headers=UNKNOWN_REJECT, strict_vocabulary=True)


__all__ = [
    "ParserConfig",
    "DEFAULT_CONFIG",
    "STRICT_CONFIG",
    "UNKNOWN_AS_OTHER",
    "UNKNOWN_REJECT",
]
