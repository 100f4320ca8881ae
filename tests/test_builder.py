"""Tests for the request and response builders."""

import pytest

from sip_header_lib import CSeq, Header, HeaderKind, Method, Uri
from sip_message_lib import RequestBuilder, ResponseBuilder, parse_sip_message


class TestRequestBuilder:
    """Test building requests."""

    def test_build(self):
        """All parts end up on the request."""
        request = (
            RequestBuilder()
            .method(Method.OPTIONS)
            .uri(Uri.sip("example.com"))
            .header(Header(HeaderKind.CSEQ, CSeq(1, Method.OPTIONS)))
            .headers([Header(HeaderKind.MAX_FORWARDS, 70)])
            .body("ping")
            .build()
        )
        assert request.method is Method.OPTIONS
        assert request.body == b"ping"
        assert [h.kind for h in request.headers] == [HeaderKind.CSEQ, HeaderKind.MAX_FORWARDS]

    def test_built_request_parses(self):
        """The wire form of a built request parses back."""
        request = (
            RequestBuilder()
            .method(Method.REGISTER)
            .uri(Uri.sip("registrar.example.com"))
            .header(Header(HeaderKind.EXPIRES, 3600))
            .build()
        )
        parsed = parse_sip_message(request.to_bytes())
        assert parsed.method is Method.REGISTER
        assert parsed.headers.expires().value == 3600
        assert parsed.headers.content_length().value == 0

    def test_builders_do_not_share_headers(self):
        """Building twice gives independent header lists."""
        builder = RequestBuilder().method(Method.BYE).uri(Uri.sip("example.com"))
        first = builder.build()
        builder.header(Header(HeaderKind.EXPIRES, 1))
        assert len(first.headers) == 0

    @pytest.mark.parametrize(
        "builder",
        [RequestBuilder().uri(Uri.sip("example.com")), RequestBuilder().method(Method.ACK)],
    )
    def test_missing_parts(self, builder):
        """Method and URI are required."""
        with pytest.raises(ValueError):
            builder.build()


class TestResponseBuilder:
    """Test building responses."""

    def test_default_reason(self):
        """The reason phrase defaults from the code."""
        response = ResponseBuilder().code(180).build()
        assert response.reason == "Ringing"
        assert response.to_string().startswith("SIP/2.0 180 Ringing\r\n")

    def test_explicit_reason(self):
        """An explicit reason wins."""
        response = ResponseBuilder().code(200).reason("Fine").build()
        assert response.reason == "Fine"

    def test_code_required(self):
        """A status code is required."""
        with pytest.raises(ValueError):
            ResponseBuilder().build()

    def test_code_range(self):
        """Status codes are three digits."""
        with pytest.raises(ValueError):
            ResponseBuilder().code(99)
