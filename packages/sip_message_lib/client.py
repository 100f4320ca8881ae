"""Client-side helpers for reading and writing SIP MESSAGE traffic."""

from __future__ import annotations

import hashlib
import logging
import os
from dataclasses import dataclass
from typing import Optional

from sip_header_lib import (
    ContentType,
    CSeq,
    Header,
    HeaderKind,
    Headers,
    Method,
    NamedHeader,
    Scheme,
    Uri,
)

from .builder import RequestBuilder, ResponseBuilder
from .messaging import SIPRequest, SIPResponse

DEFAULT_USER_AGENT = "sip-header-lib"
DEFAULT_MAX_FORWARDS = 70


class MessageHelper:
    """Read typed values out of a received request."""

    def __init__(
        self,
        uri: Uri,
        headers: Headers,
        body: bytes = b"",
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.uri = uri
        self.headers = headers
        self.body = body
        self._logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_request(cls, request: SIPRequest) -> "MessageHelper":
        if request.uri is None:
            raise ValueError("Request has no request URI")
        return cls(request.uri, request.headers, request.body)

    def from_(self) -> NamedHeader:
        return self.headers.require(HeaderKind.FROM).value

    def to(self) -> NamedHeader:
        return self.headers.require(HeaderKind.TO).value

    def contact(self) -> NamedHeader:
        return self.headers.require(HeaderKind.CONTACT).value

    def call_id(self) -> str:
        return self.headers.require(HeaderKind.CALL_ID).value

    def via(self) -> str:
        return self.headers.require(HeaderKind.VIA).value

    def data(self) -> bytes:
        """Return the body, cut to Content-Length when the header is present."""
        length = self.headers.content_length()
        if length is None:
            return self.body
        if length.value > len(self.body):
            self._logger.warning(
                "Body is %s bytes but Content-Length is %s", len(self.body), length.value
            )
        return self.body[: length.value]

    def received(self) -> SIPResponse:
        """Build the 200 OK that tells the sender to stop retransmitting."""
        return (
            ResponseBuilder()
            .code(200)
            .header(self.headers.require(HeaderKind.FROM))
            .header(self.headers.require(HeaderKind.TO))
            .header(self.headers.require(HeaderKind.CALL_ID))
            .header(self.headers.require(HeaderKind.CSEQ))
            .header(self.headers.require(HeaderKind.VIA))
            .header(Header(HeaderKind.CONTENT_LENGTH, 0))
            .build()
        )


@dataclass
class SessionState:
    """Per-session values a :class:`MessageWriter` reads and advances.

    The caller owns this object; the writer keeps no counters of its own.
    """

    uri: Uri
    call_id: str
    cseq: int = 0
    user_agent: Optional[str] = None

    @classmethod
    def new(cls, uri: Uri, *, user_agent: Optional[str] = None) -> "SessionState":
        digest = hashlib.md5(os.urandom(16)).hexdigest()
        return cls(uri=uri, call_id=f"{digest}@{uri.host}", user_agent=user_agent)

    def next_cseq(self) -> int:
        self.cseq += 1
        return self.cseq


class MessageWriter:
    """Build MESSAGE requests for one session."""

    def __init__(self, state: SessionState, *, logger: Optional[logging.Logger] = None) -> None:
        self.state = state
        self._logger = logger or logging.getLogger(__name__)

    def write_message(self, body: bytes, to: Uri, via_header: Header) -> SIPRequest:
        number = self.state.next_cseq()
        self._logger.debug(
            "Writing MESSAGE %s to %s for call %s", number, to, self.state.call_id
        )
        return (
            RequestBuilder()
            .method(Method.MESSAGE)
            .uri(to.with_scheme(Scheme.SIP))
            .header(via_header)
            .header(Header(HeaderKind.TO, NamedHeader(to)))
            .header(self.from_())
            .header(self.cseq())
            .header(self.call_id())
            .header(self.user_agent())
            .header(self.max_forwards())
            .header(self.content_type())
            .header(Header(HeaderKind.CONTENT_LENGTH, len(body)))
            .body(body)
            .build()
        )

    def cseq(self) -> Header:
        return Header(HeaderKind.CSEQ, CSeq(self.state.cseq, Method.MESSAGE))

    def content_type(self) -> Header:
        return Header(HeaderKind.CONTENT_TYPE, ContentType.PLAIN_TEXT)

    def max_forwards(self) -> Header:
        return Header(HeaderKind.MAX_FORWARDS, DEFAULT_MAX_FORWARDS)

    def user_agent(self) -> Header:
        return Header(HeaderKind.USER_AGENT, self.state.user_agent or DEFAULT_USER_AGENT)

    def call_id(self) -> Header:
        return Header(HeaderKind.CALL_ID, self.state.call_id)

    def from_(self) -> Header:
        return Header(HeaderKind.FROM, NamedHeader(self.state.uri))


__all__ = ["MessageHelper", "SessionState", "MessageWriter"]
