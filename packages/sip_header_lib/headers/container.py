"""Ordered header collection with typed lookups."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from ..errors import HeaderAbsent
from .model import Header, HeaderKind
from .write import write_headers


class Headers:
    """Headers in wire order.

    Duplicates are kept. Lookups return the first header of the requested
    kind; use :meth:`get_all` for repeatable headers such as Via.
    """

    def __init__(self, headers: Optional[Iterable[Header]] = None) -> None:
        self._headers: List[Header] = []
        if headers is not None:
            self.extend(headers)

    def push(self, header: Header) -> None:
        if not isinstance(header, Header):
            raise TypeError(f"Expected a Header, got {header!r}")
        self._headers.append(header)

    def extend(self, headers: Iterable[Header]) -> None:
        for header in headers:
            self.push(header)

    def replace(self, index: int, header: Header) -> None:
        if not isinstance(header, Header):
            raise TypeError(f"Expected a Header, got {header!r}")
        self._headers[index] = header

    def index(self, kind: HeaderKind) -> Optional[int]:
        for position, header in enumerate(self._headers):
            if header.kind is kind:
                return position
        return None

    def get(self, kind: HeaderKind) -> Optional[Header]:
        position = self.index(kind)
        return None if position is None else self._headers[position]

    def get_all(self, kind: HeaderKind) -> List[Header]:
        return [header for header in self._headers if header.kind is kind]

    def get_other(self, name: str) -> Optional[Header]:
        for header in self._headers:
            if header.kind is HeaderKind.OTHER and header.name == name:
                return header
        return None

    def require(self, kind: HeaderKind) -> Header:
        header = self.get(kind)
        if header is None:
            raise HeaderAbsent(kind.tag)
        return header

    def from_(self) -> Optional[Header]:
        return self.get(HeaderKind.FROM)

    def to(self) -> Optional[Header]:
        return self.get(HeaderKind.TO)

    def contact(self) -> Optional[Header]:
        return self.get(HeaderKind.CONTACT)

    def call_id(self) -> Optional[Header]:
        return self.get(HeaderKind.CALL_ID)

    def via(self) -> Optional[Header]:
        return self.get(HeaderKind.VIA)

    def cseq(self) -> Optional[Header]:
        return self.get(HeaderKind.CSEQ)

    def expires(self) -> Optional[Header]:
        return self.get(HeaderKind.EXPIRES)

    def content_length(self) -> Optional[Header]:
        return self.get(HeaderKind.CONTENT_LENGTH)

    def content_type(self) -> Optional[Header]:
        return self.get(HeaderKind.CONTENT_TYPE)

    def max_forwards(self) -> Optional[Header]:
        return self.get(HeaderKind.MAX_FORWARDS)

    def user_agent(self) -> Optional[Header]:
        return self.get(HeaderKind.USER_AGENT)

    def to_string(self) -> str:
        return write_headers(self._headers)

    def __iter__(self) -> Iterator[Header]:
        return iter(list(self._headers))

    def __len__(self) -> int:
        return len(self._headers)

    def __getitem__(self, index: int) -> Header:
        return self._headers[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Headers):
            return NotImplemented
        return self._headers == other._headers

    def __repr__(self) -> str:
        return f"Headers({self._headers!r})"


__all__ = ["Headers"]
