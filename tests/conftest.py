"""Shared fixtures for the SIP header and message tests."""

import pytest

from sip_header_lib import Uri


@pytest.fixture
def alice_uri():
    return Uri.sip("example.com", user="alice")


@pytest.fixture
def invite_bytes():
    return (
        b"INVITE sip:bob@biloxi.example.com SIP/2.0\r\n"
        b"Via: SIP/2.0/UDP pc33.atlanta.example.com;branch=z9hG4bK776asdhds\r\n"
        b"Via: SIP/2.0/UDP proxy.example.com;branch=z9hG4bK1234\r\n"
        b"Max-Forwards: 70\r\n"
        b'To: "Bob" <sip:bob@biloxi.example.com>\r\n'
        b'From: "Alice" <sip:alice@atlanta.example.com>;tag=1928301774\r\n'
        b"Call-ID: a84b4c76e66710@pc33.atlanta.example.com\r\n"
        b"CSeq: 314159 INVITE\r\n"
        b"Contact: <sip:alice@pc33.atlanta.example.com>\r\n"
        b"Content-Type: application/sdp\r\n"
        b"X-Custom: some value\r\n"
        b"Content-Length: 4\r\n"
        b"\r\n"
        b"v=0\n"
    )
