"""Fluent builders for outgoing requests and responses."""

from __future__ import annotations

from typing import Iterable, Optional, Union

from sip_header_lib import Header, Headers, Method, Uri

from .messaging import SIP_VERSION, SIPRequest, SIPResponse, reason_phrase

Body = Union[bytes, str]


def _to_body(body: Body) -> bytes:
    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


class _MessageBuilder:
    def __init__(self) -> None:
        self._headers = Headers()
        self._body = b""
        self._version = SIP_VERSION

    def header(self, header: Header):
        self._headers.push(header)
        return self

    def headers(self, headers: Iterable[Header]):
        self._headers.extend(headers)
        return self

    def body(self, body: Body):
        self._body = _to_body(body)
        return self

    def version(self, version: str):
        self._version = version
        return self


class RequestBuilder(_MessageBuilder):
    """Assemble a :class:`SIPRequest` one part at a time."""

    def __init__(self) -> None:
        super().__init__()
        self._method: Optional[Method] = None
        self._uri: Optional[Uri] = None

    def method(self, method: Method) -> "RequestBuilder":
        self._method = method
        return self

    def uri(self, uri: Uri) -> "RequestBuilder":
        self._uri = uri
        return self

    def build(self) -> SIPRequest:
        if self._method is None:
            raise ValueError("Request method is required")
        if self._uri is None:
            raise ValueError("Request URI is required")
        return SIPRequest(
            headers=Headers(self._headers),
            body=self._body,
            version=self._version,
            method=self._method,
            uri=self._uri,
        )


class ResponseBuilder(_MessageBuilder):
    """Assemble a :class:`SIPResponse`; the reason defaults from the code."""

    def __init__(self) -> None:
        super().__init__()
        self._code: Optional[int] = None
        self._reason: Optional[str] = None

    def code(self, code: int) -> "ResponseBuilder":
        if not 100 <= code <= 699:
            raise ValueError(f"Status code {code} out of range")
        self._code = code
        return self

    def reason(self, reason: str) -> "ResponseBuilder":
        self._reason = reason
        return self

    def build(self) -> SIPResponse:
        if self._code is None:
            raise ValueError("Response status code is required")
        return SIPResponse(
            headers=Headers(self._headers),
            body=self._body,
            version=self._version,
            status_code=self._code,
            reason=self._reason or reason_phrase(self._code),
        )


__all__ = ["RequestBuilder", "ResponseBuilder"]
