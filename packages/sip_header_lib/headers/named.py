"""Name-addr header values: ``[display-name] <uri> *(;key=value)``."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from ..errors import GrammarMismatch
from ..scan import ALPHA, SPACE, TOKEN, attempt, expect, skip_space, take_while, take_while1
from ..uri import Uri, parse_uri

_QUOTED_NAME = ALPHA | SPACE


@dataclass(frozen=True, eq=False)
class NamedHeader:
    """Value of To, From, Contact and Reply-To.

    ``parameters`` is a read-only copy of whatever mapping was passed in, so
    two headers never share one parameter map.
    """

    uri: Uri
    display_name: Optional[str] = None
    parameters: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.display_name is not None and not _is_display_name(self.display_name):
            raise ValueError(f"Unsupported display name {self.display_name!r}")
        for key, value in self.parameters.items():
            if not _is_token(key) or not _is_token(value):
                raise ValueError(f"Invalid parameter {key!r}={value!r}")
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def tag(self) -> Optional[str]:
        return self.parameters.get("tag")

    def with_parameter(self, key: str, value: str) -> "NamedHeader":
        parameters = dict(self.parameters)
        parameters[key] = value
        return replace(self, parameters=parameters)

    def with_display_name(self, display_name: Optional[str]) -> "NamedHeader":
        return replace(self, display_name=display_name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamedHeader):
            return NotImplemented
        return (
            self.uri == other.uri
            and self.display_name == other.display_name
            and dict(self.parameters) == dict(other.parameters)
        )

    def __hash__(self) -> int:
        return hash((self.uri, self.display_name, frozenset(self.parameters.items())))


def _is_token(value: str) -> bool:
    return bool(value) and all(ord(ch) in TOKEN for ch in value)


def _is_display_name(value: str) -> bool:
    return all(ord(ch) in _QUOTED_NAME for ch in value)


def parse_display_name(data: bytes, offset: int) -> Tuple[str, int]:
    if data.startswith(b'"', offset):
        name, pos = take_while(data, offset + 1, _QUOTED_NAME)
        pos = expect(data, pos, b'"')
        return name.decode("ascii"), pos
    name, pos = take_while1(data, offset, ALPHA, "display name")
    return name.decode("ascii"), pos


def parse_named_value(data: bytes, offset: int) -> Tuple[Tuple[Optional[str], Uri], int]:
    display_name, pos = attempt(parse_display_name, data, offset)
    pos = skip_space(data, pos)
    pos = expect(data, pos, b"<")
    uri, pos = parse_uri(data, pos)
    pos = expect(data, pos, b">")
    return (display_name, uri), pos


def parse_named_param(data: bytes, offset: int) -> Tuple[Tuple[str, str], int]:
    pos = expect(data, offset, b";")
    key, pos = take_while1(data, pos, TOKEN, "parameter name")
    pos = expect(data, pos, b"=")
    value, pos = take_while1(data, pos, TOKEN, "parameter value")
    return (key.decode("ascii"), value.decode("ascii")), pos


def parse_named_params(data: bytes, offset: int) -> Tuple[Dict[str, str], int]:
    """Consume ``;key=value`` groups until one fails to match.

    A group that does not match ends the loop without failing, leaving the
    caller's terminator check to reject any trailing garbage.
    """
    params: Dict[str, str] = {}
    pos = offset
    while True:
        try:
            (key, value), pos = parse_named_param(data, pos)
        except GrammarMismatch:
            break
        params[key] = value
    return params, pos


def parse_named_header(data: bytes, offset: int) -> Tuple[NamedHeader, int]:
    (display_name, uri), pos = parse_named_value(data, offset)
    params, pos = parse_named_params(data, pos)
    return NamedHeader(uri=uri, display_name=display_name, parameters=params), pos


def write_named_header(value: NamedHeader) -> str:
    parts = []
    if value.display_name is not None:
        parts.append(f'"{value.display_name}" ')
    parts.append(f"<{value.uri.to_string()}>")
    parts.extend(f";{key}={param}" for key, param in value.parameters.items())
    return "".join(parts)


__all__ = [
    "NamedHeader",
    "parse_display_name",
    "parse_named_value",
    "parse_named_param",
    "parse_named_params",
    "parse_named_header",
    "write_named_header",
]
