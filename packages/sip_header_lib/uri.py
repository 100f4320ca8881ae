"""SIP and TEL URI values and their grammar."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .errors import GrammarMismatch, NumericOverflow, VocabularyMiss
from .scan import (
    ALPHA,
    ALPHANUMERIC,
    DIGIT,
    TOKEN,
    charset,
    expect,
    take_while,
    take_while1,
    to_u32,
)

_URI_BODY = frozenset(range(256)) - charset(">?, \t\r\n")
_USER = ALPHANUMERIC | charset("-_.!~*'()%&=+$;/:")
_HOST = ALPHANUMERIC | charset("-.")
_IPV6 = charset("0123456789abcdefABCDEF:.")
_TEL = DIGIT | charset("+-.()*#abcdefABCDEF")
_PARAM = TOKEN | charset("[]/:&+$")


class Scheme(Enum):
    SIP = "sip"
    SIPS = "sips"
    TEL = "tel"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, eq=False)
class Uri:
    scheme: Scheme
    host: str
    user: Optional[str] = None
    password: Optional[str] = None
    port: Optional[int] = None
    parameters: Mapping[str, Optional[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.port is not None and not 0 <= self.port <= 0xFFFF:
            raise ValueError(f"Port {self.port} out of range")
        if self.scheme is Scheme.TEL and not self.user:
            raise ValueError("tel URIs require a subscriber number in 'user'")
        if self.scheme is not Scheme.TEL and not self.host:
            raise ValueError(f"{self.scheme.value} URIs require a host")
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @classmethod
    def sip(cls, host: str, user: Optional[str] = None, port: Optional[int] = None) -> "Uri":
        return cls(scheme=Scheme.SIP, host=host, user=user, port=port)

    @classmethod
    def from_string(cls, text: str) -> "Uri":
        data = text.encode("utf-8")
        uri, offset = parse_uri(data)
        if offset != len(data):
            raise GrammarMismatch(f"Trailing characters after URI {text!r}", offset)
        return uri

    def with_scheme(self, scheme: Scheme) -> "Uri":
        return replace(self, scheme=scheme)

    def with_parameter(self, key: str, value: Optional[str] = None) -> "Uri":
        parameters = dict(self.parameters)
        parameters[key] = value
        return replace(self, parameters=parameters)

    def to_string(self) -> str:
        parts = [self.scheme.value, ":"]
        if self.scheme is Scheme.TEL:
            parts.append(self.user or "")
        else:
            if self.user is not None:
                parts.append(self.user)
                if self.password is not None:
                    parts.append(f":{self.password}")
                parts.append("@")
            parts.append(self.host)
            if self.port is not None:
                parts.append(f":{self.port}")
        for key, value in self.parameters.items():
            parts.append(f";{key}" if value is None else f";{key}={value}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_string()

    def _key(self) -> tuple:
        return (
            self.scheme,
            self.host,
            self.user,
            self.password,
            self.port,
            frozenset(self.parameters.items()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Uri):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())


_SCHEMES = {scheme.value.encode("ascii"): scheme for scheme in Scheme}


def parse_uri(data: bytes, offset: int = 0) -> Tuple[Uri, int]:
    raw_scheme, pos = take_while1(data, offset, ALPHA, "URI scheme")
    scheme = _SCHEMES.get(raw_scheme.lower())
    if scheme is None:
        raise VocabularyMiss("URI scheme", raw_scheme.decode("ascii"), offset)
    pos = expect(data, pos, b":")

    user: Optional[str] = None
    password: Optional[str] = None
    host = ""
    port: Optional[int] = None
    if scheme is Scheme.TEL:
        number, pos = take_while1(data, pos, _TEL, "telephone number")
        user = number.decode("ascii")
    else:
        _, end = take_while(data, pos, _URI_BODY)
        at = data.find(b"@", pos, end)
        if at >= 0:
            userinfo, info_end = take_while1(data, pos, _USER, "URI user")
            if info_end != at:
                raise GrammarMismatch("Invalid character in URI user part", info_end)
            name, _, secret = userinfo.partition(b":")
            user = name.decode("ascii")
            password = secret.decode("ascii") if b":" in userinfo else None
            pos = at + 1
        host, pos = _parse_host(data, pos)
        if data.startswith(b":", pos):
            digits, pos = take_while1(data, pos + 1, DIGIT, "port")
            port = to_u32(digits)
            if port > 0xFFFF:
                raise NumericOverflow(f"Port {port} out of range")

    parameters = {}
    while data.startswith(b";", pos):
        key, pos = take_while1(data, pos + 1, _PARAM, "URI parameter name")
        value: Optional[str] = None
        if data.startswith(b"=", pos):
            raw_value, pos = take_while(data, pos + 1, _PARAM)
            value = raw_value.decode("ascii")
        parameters[key.decode("ascii")] = value
    return Uri(scheme, host, user, password, port, parameters), pos


def _parse_host(data: bytes, offset: int) -> Tuple[str, int]:
    if data.startswith(b"[", offset):
        address, pos = take_while1(data, offset + 1, _IPV6, "IPv6 address")
        pos = expect(data, pos, b"]")
        return f"[{address.decode('ascii')}]", pos
    host, pos = take_while1(data, offset, _HOST, "host")
    return host.decode("ascii"), pos


__all__ = ["Scheme", "Uri", "parse_uri"]
