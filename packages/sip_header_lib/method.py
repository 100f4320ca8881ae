"""SIP request method vocabulary."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from .errors import VocabularyMiss
from .scan import UPPER, take_while1


class Method(Enum):
    INVITE = "INVITE"
    ACK = "ACK"
    BYE = "BYE"
    CANCEL = "CANCEL"
    REGISTER = "REGISTER"
    OPTIONS = "OPTIONS"
    PRACK = "PRACK"
    SUBSCRIBE = "SUBSCRIBE"
    NOTIFY = "NOTIFY"
    PUBLISH = "PUBLISH"
    INFO = "INFO"
    REFER = "REFER"
    MESSAGE = "MESSAGE"
    UPDATE = "UPDATE"

    def __str__(self) -> str:
        return self.value


_BY_TOKEN = {method.value.encode("ascii"): method for method in Method}


def parse_method(data: bytes, offset: int = 0) -> Tuple[Method, int]:
    token, end = take_while1(data, offset, UPPER, "method token")
    method = _BY_TOKEN.get(token)
    if method is None:
        raise VocabularyMiss("method", token.decode("ascii"), offset)
    return method, end


__all__ = ["Method", "parse_method"]
