"""Tests for the header dispatcher."""

import logging

import pytest

from sip_header_lib import (
    GRAMMARS,
    STRICT_CONFIG,
    ContentType,
    Header,
    HeaderKind,
    Language,
    Method,
    NoMatchingHeader,
    NumericOverflow,
    ParserConfig,
    parse_header,
    parse_headers,
)


class TestRegistrationTable:
    """Test the grammar table."""

    def test_every_kind_but_other_is_registered(self):
        """Each header kind except Other has exactly one grammar."""
        kinds = [grammar.kind for grammar in GRAMMARS]
        assert len(kinds) == len(set(kinds))
        assert set(kinds) == set(HeaderKind) - {HeaderKind.OTHER}

    def test_table_entries_write(self):
        """Each entry carries the serializer."""
        grammar = GRAMMARS[0]
        assert grammar.write(Header(HeaderKind.ACCEPT, [Method.INVITE])) == "Accept: INVITE"


class TestPrefixDisambiguation:
    """Tags that are prefixes of other tags."""

    def test_accept_encoding(self):
        """Accept does not capture Accept-Encoding."""
        header, _ = parse_header(b"Accept-Encoding: application/sdp\r\n")
        assert header == Header(HeaderKind.ACCEPT_ENCODING, ContentType.SDP)

    def test_accept_language(self):
        """Accept does not capture Accept-Language."""
        header, _ = parse_header(b"Accept-Language: en\r\n")
        assert header == Header(HeaderKind.ACCEPT_LANGUAGE, Language.ENGLISH)

    def test_accept(self):
        """Accept itself still matches."""
        header, _ = parse_header(b"Accept: INVITE,OPTIONS\r\n")
        assert header.kind is HeaderKind.ACCEPT

    @pytest.mark.parametrize(
        "line, kind",
        [
            (b"Content-Type: application/sdp\r\n", HeaderKind.CONTENT_TYPE),
            (b"Content-Length: 0\r\n", HeaderKind.CONTENT_LENGTH),
            (b"Route: <sip:proxy.example.com;lr>\r\n", HeaderKind.ROUTE),
            (b"Record-Route: <sip:proxy.example.com;lr>\r\n", HeaderKind.RECORD_ROUTE),
            (b"Expires: 60\r\n", HeaderKind.EXPIRES),
            (b"Min-Expires: 60\r\n", HeaderKind.MIN_EXPIRES),
            (b"Proxy-Authorization: Digest username=\"a\"\r\n", HeaderKind.PROXY_AUTHORIZATION),
            (b"Authorization: Digest username=\"a\"\r\n", HeaderKind.AUTHORIZATION),
            (b"Call-Info: <http://example.com/a.png>\r\n", HeaderKind.CALL_INFO),
            (b"Call-ID: abc@host\r\n", HeaderKind.CALL_ID),
        ],
    )
    def test_similar_tags(self, line, kind):
        """Every line lands on its own grammar."""
        header, offset = parse_header(line)
        assert header.kind is kind
        assert offset == len(line)


class TestUnknownHeaders:
    """Lines whose tag has no grammar."""

    def test_kept_as_other_by_default(self):
        """The default configuration keeps them verbatim."""
        header, offset = parse_header(b"X-Custom: v\r\n")
        assert header == Header.other("X-Custom", "v")
        assert header.name == "X-Custom"
        assert offset == 13

    def test_rejected_when_strict(self):
        """The strict configuration raises NoMatchingHeader."""
        with pytest.raises(NoMatchingHeader) as exc_info:
            parse_header(b"X-Custom: v\r\n", config=STRICT_CONFIG)
        assert exc_info.value.line == b"X-Custom: v"

    def test_reject_only(self):
        """unknown_headers alone can be switched to reject."""
        config = ParserConfig(unknown_headers="reject")
        with pytest.raises(NoMatchingHeader):
            parse_header(b"X-Custom: v\r\n", config=config)

    def test_case_sensitive_tags(self):
        """Tags are matched case-sensitively, so a lowercase tag is unknown."""
        header, _ = parse_header(b"expires: 60\r\n")
        assert header == Header.other("expires", "60")

    def test_invalid_setting(self):
        """Only the two documented modes exist."""
        with pytest.raises(ValueError):
            ParserConfig(unknown_headers="ignore")

    def test_logs_fallback(self, caplog):
        """Keeping an unknown header is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="sip_header_lib.headers.dispatch"):
            parse_header(b"X-Custom: v\r\n")
        assert "X-Custom" in caplog.text


class TestFailures:
    """Lines that cannot be parsed."""

    def test_malformed_known_header(self):
        """A known tag with a bad value is never downgraded to Other."""
        with pytest.raises(NoMatchingHeader) as exc_info:
            parse_header(b"Max-Forwards: abc\r\n")
        assert exc_info.value.__cause__ is not None

    def test_no_colon(self):
        """A line without a colon matches nothing."""
        with pytest.raises(NoMatchingHeader):
            parse_header(b"garbage line\r\n")

    def test_overflow_propagates(self):
        """Conversion errors are raised as they are."""
        with pytest.raises(NumericOverflow):
            parse_header(b"Expires: 99999999999\r\n")

    def test_strict_vocabulary_miss(self):
        """A vocabulary miss under strict parsing fails the line."""
        with pytest.raises(NoMatchingHeader):
            parse_header(b"Content-Type: text/html\r\n", config=STRICT_CONFIG)


class TestParseHeaders:
    """Test parsing a header block."""

    def test_block_until_empty_line(self):
        """Parsing stops after the empty line."""
        data = b"Max-Forwards: 70\r\nCSeq: 2 BYE\r\n\r\nbody"
        headers, offset = parse_headers(data)
        assert [header.kind for header in headers] == [HeaderKind.MAX_FORWARDS, HeaderKind.CSEQ]
        assert data[offset:] == b"body"

    def test_block_until_end(self):
        """Without an empty line parsing runs to the end of the data."""
        data = b"Via: a\r\nVia: b\r\n"
        headers, offset = parse_headers(data)
        assert len(headers) == 2
        assert offset == len(data)

    def test_keeps_duplicates_in_order(self):
        """Duplicate headers are all kept in wire order."""
        headers, _ = parse_headers(b"Via: first\r\nX-A: 1\r\nVia: second\r\n")
        assert [header.value for header in headers.get_all(HeaderKind.VIA)] == ["first", "second"]
        assert headers[1] == Header.other("X-A", "1")
