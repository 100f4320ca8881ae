"""Tests for MessageHelper, SessionState and MessageWriter."""

import re

import pytest

from sip_header_lib import (
    ContentType,
    CSeq,
    Header,
    HeaderAbsent,
    HeaderKind,
    Headers,
    Method,
    Scheme,
    Uri,
)
from sip_message_lib import (
    MessageHelper,
    MessageWriter,
    SessionState,
    parse_sip_message,
)

VIA = Header(HeaderKind.VIA, "SIP/2.0/TCP 10.0.0.1:5060;branch=z9hG4bK1")


class TestMessageHelper:
    """Test reading received requests."""

    def test_getters(self, invite_bytes):
        """Typed getters unwrap header values."""
        helper = MessageHelper.from_request(parse_sip_message(invite_bytes))
        assert helper.from_().display_name == "Alice"
        assert helper.to().uri.user == "bob"
        assert helper.contact().uri.host == "pc33.atlanta.example.com"
        assert helper.call_id() == "a84b4c76e66710@pc33.atlanta.example.com"
        assert helper.via().startswith("SIP/2.0/UDP pc33")

    def test_missing_header(self, alice_uri):
        """A missing header raises HeaderAbsent."""
        helper = MessageHelper(alice_uri, Headers())
        with pytest.raises(HeaderAbsent) as exc_info:
            helper.call_id()
        assert "Call-ID" in str(exc_info.value)

    def test_data_truncated_to_content_length(self, alice_uri):
        """The body is cut at Content-Length."""
        helper = MessageHelper(
            alice_uri, Headers([Header(HeaderKind.CONTENT_LENGTH, 5)]), b"hello world"
        )
        assert helper.data() == b"hello"

    def test_data_without_content_length(self, alice_uri):
        """Without Content-Length the whole body is returned."""
        assert MessageHelper(alice_uri, Headers(), b"abc").data() == b"abc"

    def test_received(self, invite_bytes):
        """received() copies the transaction headers into a 200 OK."""
        request = parse_sip_message(invite_bytes)
        response = MessageHelper.from_request(request).received()
        assert response.status_code == 200
        assert [h.kind for h in response.headers] == [
            HeaderKind.FROM,
            HeaderKind.TO,
            HeaderKind.CALL_ID,
            HeaderKind.CSEQ,
            HeaderKind.VIA,
            HeaderKind.CONTENT_LENGTH,
        ]
        assert response.headers.cseq() == request.headers.cseq()
        assert response.headers.content_length().value == 0


class TestSessionState:
    """Test per-session state."""

    def test_new(self, alice_uri):
        """A new session gets a random Call-ID at the account host."""
        state = SessionState.new(alice_uri)
        assert re.fullmatch(r"[0-9a-f]{32}@example\.com", state.call_id)
        assert state.cseq == 0

    def test_call_ids_differ(self, alice_uri):
        """Two sessions do not share a Call-ID."""
        assert SessionState.new(alice_uri).call_id != SessionState.new(alice_uri).call_id

    def test_next_cseq(self, alice_uri):
        """next_cseq counts up from one."""
        state = SessionState(uri=alice_uri, call_id="x")
        assert [state.next_cseq(), state.next_cseq()] == [1, 2]


class TestMessageWriter:
    """Test writing MESSAGE requests."""

    def test_write_message(self, alice_uri):
        """A MESSAGE carries the session headers and body."""
        state = SessionState(uri=alice_uri, call_id="call-1", user_agent="tests")
        writer = MessageWriter(state)
        to = Uri.sip("example.com", user="bob")
        request = writer.write_message(b"hi", to, VIA)
        headers = request.headers
        assert request.method is Method.MESSAGE
        assert request.uri == to
        assert headers.via() == VIA
        assert headers.to().value.uri == to
        assert headers.from_().value.uri == alice_uri
        assert headers.cseq().value == CSeq(1, Method.MESSAGE)
        assert headers.call_id().value == "call-1"
        assert headers.user_agent().value == "tests"
        assert headers.max_forwards().value == 70
        assert headers.content_type().value is ContentType.PLAIN_TEXT
        assert headers.content_length().value == 2
        assert request.body == b"hi"

    def test_cseq_advances_in_caller_state(self, alice_uri):
        """Each message advances the caller-owned counter."""
        state = SessionState(uri=alice_uri, call_id="call-1")
        writer = MessageWriter(state)
        writer.write_message(b"a", alice_uri, VIA)
        second = writer.write_message(b"b", alice_uri, VIA)
        assert state.cseq == 2
        assert second.headers.cseq().value.number == 2

    def test_default_user_agent(self, alice_uri):
        """Without a configured agent a default is used."""
        writer = MessageWriter(SessionState(uri=alice_uri, call_id="c"))
        assert writer.user_agent().value == "sip-header-lib"

    def test_request_uri_uses_sip_scheme(self, alice_uri):
        """The request URI is forced to sip:."""
        writer = MessageWriter(SessionState(uri=alice_uri, call_id="c"))
        to = Uri.sip("example.com", user="bob").with_scheme(Scheme.SIPS)
        request = writer.write_message(b"", to, VIA)
        assert request.uri.scheme is Scheme.SIP

    def test_written_message_parses(self, alice_uri):
        """The written request parses back into the same headers."""
        writer = MessageWriter(SessionState(uri=alice_uri, call_id="c"))
        request = writer.write_message(b"hello", Uri.sip("example.com", user="bob"), VIA)
        parsed = parse_sip_message(request.to_bytes())
        assert parsed.headers == request.headers
        assert parsed.body == b"hello"
