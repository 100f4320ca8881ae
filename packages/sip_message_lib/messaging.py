"""SIP message envelope: start line, typed headers and body."""

from __future__ import annotations

import abc
import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from sip_header_lib import (
    DEFAULT_CONFIG,
    Header,
    HeaderKind,
    Headers,
    Method,
    ParserConfig,
    SIPParseError,
    Uri,
    parse_headers,
    parse_method,
    parse_uri,
)

CRLF = "\r\n"
SIP_VERSION = "SIP/2.0"

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(rb"^SIP/\d\.\d$")

REASON_PHRASES = {
    100: "Trying",
    180: "Ringing",
    181: "Call Is Being Forwarded",
    183: "Session Progress",
    200: "OK",
    202: "Accepted",
    301: "Moved Permanently",
    302: "Moved Temporarily",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    407: "Proxy Authentication Required",
    408: "Request Timeout",
    415: "Unsupported Media Type",
    420: "Bad Extension",
    423: "Interval Too Brief",
    480: "Temporarily Unavailable",
    481: "Call/Transaction Does Not Exist",
    486: "Busy Here",
    487: "Request Terminated",
    488: "Not Acceptable Here",
    500: "Server Internal Error",
    501: "Not Implemented",
    503: "Service Unavailable",
    504: "Server Time-out",
    600: "Busy Everywhere",
    603: "Decline",
}


def reason_phrase(status_code: int) -> str:
    return REASON_PHRASES.get(status_code, "Unknown")


@dataclass
class SIPMessage(abc.ABC):
    """Abstract base for requests and responses."""

    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    version: str = SIP_VERSION

    @property
    @abc.abstractmethod
    def start_line(self) -> str:
        """First line of the message, without its terminator."""

    def to_string(self) -> str:
        return self.to_bytes().decode("utf-8")

    def to_bytes(self) -> bytes:
        head = self.start_line + CRLF + self._with_content_length().to_string() + CRLF
        return head.encode("utf-8") + self.body

    def _with_content_length(self) -> Headers:
        headers = Headers(self.headers)
        length = Header(HeaderKind.CONTENT_LENGTH, len(self.body))
        position = headers.index(HeaderKind.CONTENT_LENGTH)
        if position is None:
            headers.push(length)
        else:
            headers.replace(position, length)
        return headers

    @property
    def is_request(self) -> bool:
        return isinstance(self, SIPRequest)

    @property
    def is_response(self) -> bool:
        return isinstance(self, SIPResponse)


@dataclass
class SIPRequest(SIPMessage):
    method: Method = Method.INVITE
    uri: Optional[Uri] = None

    @property
    def start_line(self) -> str:
        if self.uri is None:
            raise ValueError("Request has no request URI")
        return f"{self.method.value} {self.uri.to_string()} {self.version}"


@dataclass
class SIPResponse(SIPMessage):
    status_code: int = 200
    reason: str = "OK"

    @property
    def start_line(self) -> str:
        return f"{self.version} {self.status_code} {self.reason}"


def parse_sip_message(
    data: Union[bytes, str, bytearray, memoryview],
    *,
    config: ParserConfig = DEFAULT_CONFIG,
) -> SIPMessage:
    if isinstance(data, str):
        raw = data.encode("utf-8")
    else:
        raw = bytes(data)
    if not raw.strip():
        raise SIPParseError("Empty SIP message")
    line_end = raw.find(b"\r\n")
    if line_end < 0 or b"\r\n\r\n" not in raw:
        raise SIPParseError("SIP message missing header terminator")
    start_line = raw[:line_end]
    headers, body_start = parse_headers(raw, line_end + 2, config=config)
    body = raw[body_start:]
    declared = headers.content_length()
    if declared is not None and declared.value != len(body):
        logger.warning(
            "Content-Length %s does not match body size %s", declared.value, len(body)
        )
    if start_line.startswith(b"SIP/"):
        version, status_code, reason = _parse_status_line(start_line)
        return SIPResponse(
            headers=headers,
            body=body,
            version=version,
            status_code=status_code,
            reason=reason,
        )
    method, uri, version = _parse_request_line(start_line)
    return SIPRequest(headers=headers, body=body, version=version, method=method, uri=uri)


def _parse_request_line(line: bytes) -> Tuple[Method, Uri, str]:
    parts = line.split(b" ")
    if len(parts) != 3 or not _VERSION_RE.match(parts[2]):
        raise SIPParseError(f"Invalid request line: {line!r}")
    token, target, version = parts
    try:
        method, end = parse_method(token)
        uri, uri_end = parse_uri(target)
    except SIPParseError as exc:
        raise SIPParseError(f"Invalid request line: {line!r}") from exc
    if end != len(token) or uri_end != len(target):
        raise SIPParseError(f"Invalid request line: {line!r}")
    return method, uri, version.decode("ascii")


def _parse_status_line(line: bytes) -> Tuple[str, int, str]:
    parts = line.split(b" ", 2)
    if len(parts) < 3 or not _VERSION_RE.match(parts[0]):
        raise SIPParseError(f"Invalid status line: {line!r}")
    version, code, reason = parts
    if len(code) != 3 or not code.isdigit():
        raise SIPParseError(f"Invalid status code: {code!r}")
    return version.decode("ascii"), int(code), reason.decode("utf-8", errors="replace")


__all__ = [
    "SIPMessage",
    "SIPRequest",
    "SIPResponse",
    "SIPParseError",
    "REASON_PHRASES",
    "reason_phrase",
    "parse_sip_message",
]
