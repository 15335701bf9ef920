"""Tests for IPv6 normalization."""

import ipaddress

import pytest

from ssrf_guard.ipv6 import format_ipv6, parse_ipv6
from ssrf_guard.models import AddressFormatError


class TestParseIPv6Accepts:
    """Valid colon-hex forms."""

    @pytest.mark.parametrize("address", [
        "::",
        "::1",
        "1::",
        "fe80::1",
        "2001:4860:4860::8888",
        "2001:db8:0:0:0:0:0:1",
        "2001:0db8:0000:0000:0000:0000:0000:0001",
        "1:2:3:4:5:6:7::",
        "::2:3:4:5:6:7:8",
        "ffff:ffff:ffff:ffff:ffff:ffff:ffff:ffff",
        "::ffff:127.0.0.1",
        "::ffff:8.8.8.8",
        "64:ff9b::192.0.2.33",
        "1:2:3:4:5:6:1.2.3.4",
    ])
    def test_matches_stdlib_value(self, address):
        """Test the value agrees with ipaddress for unambiguous forms."""
        assert parse_ipv6(address) == int(ipaddress.IPv6Address(address))

    def test_unspecified_is_zero(self):
        """Test '::' expands to eight zero groups."""
        assert parse_ipv6("::") == 0

    def test_zero_padded_loopback(self):
        """Test zero-padded groups still normalize to ::1."""
        assert parse_ipv6("000:0:0000::01") == 1

    def test_case_insensitive(self):
        """Test hex case does not change the value."""
        expected = parse_ipv6("::ffff:127.0.0.1")
        assert parse_ipv6("::FFFF:127.0.0.1") == expected
        assert parse_ipv6("::fFFf:127.0.0.1") == expected
        assert expected == (0xFFFF << 32) | 0x7F000001

    def test_ipv4_tail_supplies_low_bits(self):
        """Test the dotted tail fills the low 32 bits."""
        assert parse_ipv6("::1.2.3.4") == 0x01020304


class TestParseIPv6Rejects:
    """Malformed colon-hex forms."""

    @pytest.mark.parametrize("address", [
        "1::2::3",
        "::1::",
        ":::",
        "1:::2",
    ])
    def test_multiple_compressions(self, address):
        """Test more than one '::' run."""
        with pytest.raises(AddressFormatError):
            parse_ipv6(address)

    @pytest.mark.parametrize("address", [
        "1:2:3:4:5:6:7",
        "1:2:3:4:5:6:7:8:9",
        "1:2:3:4:5:6:7:8::",
        "::1:2:3:4:5:6:7:8",
        "1:2:3:4:5:6:7::8",
        ":1:2:3:4:5:6:7",
        "1:2:3:4:5:6:7:",
        "1:2:3:4:5:6:1.2.3.4:8",
        "1:2:3:4:5:6:7:1.2.3.4",
    ])
    def test_wrong_group_count(self, address):
        """Test group counts that do not add up to eight."""
        with pytest.raises(AddressFormatError):
            parse_ipv6(address)

    @pytest.mark.parametrize("address", [
        "12345::",
        "::00001",
        "fe80::g",
        "fe80::1%eth0",
        "[::1]",
        "::1/128",
        " ::1",
        "::1 ",
        "0x1::",
        "f_f::",
    ])
    def test_bad_groups_and_characters(self, address):
        """Test oversized groups and characters outside the hex alphabet."""
        with pytest.raises(AddressFormatError):
            parse_ipv6(address)

    @pytest.mark.parametrize("address", [
        "::ffff:127.1",
        "::ffff:0177.0.0.1",
        "::ffff:127.0.0.01",
        "::ffff:0x7f.0.0.1",
        "::ffff:256.0.0.1",
        "::ffff:1.2.3.4.5",
        "::1.2.3.4:1",
        "1.2.3.4::",
        "1.2.3.4",
    ])
    def test_non_canonical_ipv4_tail(self, address):
        """Test the embedded IPv4 tail follows the strict IPv4 rules."""
        with pytest.raises(AddressFormatError):
            parse_ipv6(address)

    @pytest.mark.parametrize("value", [None, "", 1, b"::1"])
    def test_non_string_or_empty(self, value):
        """Test non-string and empty input."""
        with pytest.raises(AddressFormatError):
            parse_ipv6(value)


class TestFormatIPv6:
    """Tests for compressed rendering."""

    def test_compresses_zero_run(self):
        """Test the longest zero run is compressed."""
        assert format_ipv6(parse_ipv6("2001:4860:4860:0:0:0:0:8888")) == "2001:4860:4860::8888"

    def test_loopback(self):
        """Test loopback renders as ::1."""
        assert format_ipv6(1) == "::1"

    @pytest.mark.parametrize("value", [-1, 1 << 128, "::1"])
    def test_rejects_out_of_range(self, value):
        """Test values outside 128 bits."""
        with pytest.raises(AddressFormatError):
            format_ipv6(value)
