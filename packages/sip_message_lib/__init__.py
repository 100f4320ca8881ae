"""SIP message envelope, builders and client helpers on top of sip_header_lib."""

from .builder import RequestBuilder, ResponseBuilder
from .client import MessageHelper, MessageWriter, SessionState
from .messaging import (
    REASON_PHRASES,
    SIPMessage,
    SIPParseError,
    SIPRequest,
    SIPResponse,
    parse_sip_message,
    reason_phrase,
)

__all__ = [
    "SIPMessage",
    "SIPRequest",
    "SIPResponse",
    "SIPParseError",
    "REASON_PHRASES",
    "reason_phrase",
    "parse_sip_message",
    "RequestBuilder",
    "ResponseBuilder",
    "MessageHelper",
    "MessageWriter",
    "SessionState",
]
