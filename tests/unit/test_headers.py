"""
Tests for forwarding header parsing
"""
import pytest

from clientaddr.exceptions import HeaderReason, MalformedHeaderError
from clientaddr.headers import (
    extract_chain,
    normalize_headers,
    parse_comma_list,
    parse_forwarded,
    split_top_level,
)
from clientaddr.logging import set_error_handler


class TestParseForwarded:
    """Test RFC 7239 Forwarded parsing"""

    def test_multiple_for(self):
        """Test elements are read left to right"""
        value = "for=192.0.2.43, for=198.51.100.17;by=203.0.113.60;proto=http;host=example.com"
        assert parse_forwarded(value) == ["192.0.2.43", "198.51.100.17"]

    def test_all_options_with_spaces(self):
        """Test whitespace around pairs and other parameters are ignored"""
        value = "for=192.0.2.60; proto=http;by=203.0.113.43; host=_hiddenProxy, for=192.0.2.61"
        assert parse_forwarded(value) == ["192.0.2.60", "192.0.2.61"]

    def test_quoted_ipv6_with_port(self):
        """Test bracketed, quoted IPv6 with port and case-insensitive key"""
        value = 'For="[2001:db8:cafe::17]:4711", host=_internalProxy'
        assert parse_forwarded(value) == ["2001:db8:cafe::17"]

    def test_for_not_first_parameter(self):
        """Test for= is found anywhere within an element"""
        assert parse_forwarded("proto=https;for=198.51.100.17") == ["198.51.100.17"]

    def test_obfuscated_identifier_rejects_header(self):
        """Test a for= value that is not an address rejects everything"""
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_forwarded('For="[2001:db8:cafe::17]:4711", for=_internalProxy')
        assert exc_info.value.reason == HeaderReason.INVALID_ADDRESS
        assert exc_info.value.metadata["token"] == "_internalProxy"

    def test_unknown_rejects_header(self):
        """Test the 'unknown' token rejects the header"""
        with pytest.raises(MalformedHeaderError):
            parse_forwarded("for=unknown, for=192.0.2.1")

    def test_no_for_parameter(self):
        """Test header without any for= is rejected"""
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_forwarded("proto=https;by=203.0.113.43")
        assert exc_info.value.reason == HeaderReason.MISSING_FOR

    def test_quoted_comma_does_not_split(self):
        """Test commas inside quoted values stay in their element"""
        value = 'host="a,b";for=192.0.2.1, for=192.0.2.2'
        assert parse_forwarded(value) == ["192.0.2.1", "192.0.2.2"]

    def test_unbalanced_quotes(self):
        """Test unterminated quoted string rejects the header"""
        with pytest.raises(MalformedHeaderError) as exc_info:
            parse_forwarded('for="192.0.2.1')
        assert exc_info.value.reason == HeaderReason.UNBALANCED_QUOTES


class TestParseCommaList:
    """Test comma-list parsing"""

    def test_chain_order(self):
        """Test entries are kept oldest first"""
        assert parse_comma_list("192.168.1.4, 192.168.1.3, 192.168.1.2") == [
            "192.168.1.4", "192.168.1.3", "192.168.1.2",
        ]

    def test_ports_stripped(self):
        """Test every entry loses its port"""
        assert parse_comma_list("192.168.1.4:81, 192.168.1.3:81") == ["192.168.1.4", "192.168.1.3"]

    def test_ipv6_entry(self):
        """Test IPv6 literal is accepted"""
        assert parse_comma_list("001:DB8::21f:5bff:febf:ce22:8a2e") == ["001:DB8::21f:5bff:febf:ce22:8a2e"]

    @pytest.mark.parametrize("value", [
        "foo-bar 192.168.1.2",
        "192.168.1.3, proxy.internal",
        "192.168.1.3,,192.168.1.2",
        "192.168.1.3, ",
    ])
    def test_invalid_entry_rejects_header(self, value):
        """Test one bad entry rejects the whole list"""
        with pytest.raises(MalformedHeaderError):
            parse_comma_list(value)


class TestExtractChain:
    """Test extract_chain"""

    def test_missing_header(self):
        """Test missing header is absent"""
        assert extract_chain("X-Forwarded-For", None) is None

    def test_format_chosen_by_name(self):
        """Test Forwarded is structured regardless of case"""
        assert extract_chain("FORWARDED", "for=192.0.2.1") == ["192.0.2.1"]
        assert extract_chain("X-Forwarded-For", "for=192.0.2.1") is None

    def test_custom_header_is_comma_list(self):
        """Test unknown headers use the comma-list format"""
        assert extract_chain("Foo-Bar", "192.168.1.3") == ["192.168.1.3"]

    def test_empty_value_rejected(self):
        """Test blank header is rejected"""
        assert extract_chain("X-Forwarded-For", "  ") is None

    def test_rejection_reported_to_error_handler(self):
        """Test rejected headers reach the custom error handler"""
        captured = []
        set_error_handler(lambda name, exc, ctx: captured.append((name, exc, ctx)))

        assert extract_chain("X-Forwarded-For", "_spoofed") is None

        assert len(captured) == 1
        name, exc, ctx = captured[0]
        assert name == "clientaddr.headers"
        assert isinstance(exc, MalformedHeaderError)
        assert ctx == {"header": "x-forwarded-for", "reason": "INVALID_ADDRESS"}

    def test_never_raises(self):
        """Test malformed content degrades to None"""
        for value in ['for="', "for=", ",,,", "for=[::1", "\x00"]:
            assert extract_chain("Forwarded", value) is None


class TestNormalizeHeaders:
    """Test header mapping normalization"""

    def test_lowercases_names(self):
        """Test names become case-insensitive keys"""
        assert normalize_headers({"X-Forwarded-For": "1.2.3.4"}) == {"x-forwarded-for": "1.2.3.4"}

    def test_repeated_headers_joined(self):
        """Test repeated fields are combined as an HTTP list"""
        pairs = [("X-Forwarded-For", "1.1.1.1"), ("x-forwarded-for", "2.2.2.2")]
        assert normalize_headers(pairs) == {"x-forwarded-for": "1.1.1.1, 2.2.2.2"}

    def test_raw_asgi_headers(self):
        """Test byte pairs from an ASGI scope"""
        assert normalize_headers([(b"forwarded", b"for=1.2.3.4")]) == {"forwarded": "for=1.2.3.4"}

    def test_none(self):
        """Test missing headers"""
        assert normalize_headers(None) == {}


class TestSplitTopLevel:
    """Test quote-aware splitting"""

    def test_escaped_quote_inside_string(self):
        """Test escaped quote does not end the quoted string"""
        assert split_top_level('a="x\\",y",b', ",") == ['a="x\\",y"', "b"]
