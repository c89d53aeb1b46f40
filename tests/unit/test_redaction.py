"""Tests for address redaction."""

import pytest

from ipv6perftest.redaction import redact_ipv4, redact_ipv6


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("203.0.113.7", "203.0.113.0"),
        ("192.168.1.100", "192.168.1.0"),
        ("10.0.0.0", "10.0.0.0"),
    ],
)
def test_redact_ipv4_keeps_first_three_octets(address: str, expected: str) -> None:
    """Zeroes the last octet of a dotted quad."""
    assert redact_ipv4(address) == expected


@pytest.mark.parametrize("address", ["", "203.0.113", "not-an-address", "1.2.3.4.5"])
def test_redact_ipv4_returns_malformed_input_unchanged(address: str) -> None:
    """Input without exactly four parts is returned as is."""
    assert redact_ipv4(address) == address


@pytest.mark.parametrize(
    ("address", "expected"),
    [
        ("2001:db8:1234:5678:9abc:def0:1234:5678", "2001:db8:1234::"),
        ("2001:0db8:abcd:0012:0000:0000:0000:0001", "2001:db8:abcd::"),
        ("2a00:1450:4001:81c::200e", "2a00:1450:4001::"),
    ],
)
def test_redact_ipv6_keeps_first_three_groups(address: str, expected: str) -> None:
    """Truncates to the /48 prefix."""
    assert redact_ipv6(address) == expected


def test_redact_ipv6_expands_compressed_groups() -> None:
    """Compressed zero groups inside the prefix are not mistaken for groups."""
    assert redact_ipv6("2001:db8::1") == "2001:db8::"


@pytest.mark.parametrize("address", ["", "fe80", "2001:db8"])
def test_redact_ipv6_returns_short_input_unchanged(address: str) -> None:
    """Input with fewer than three groups is returned as is."""
    assert redact_ipv6(address) == address


def test_redact_ipv6_truncates_unparseable_input_by_groups() -> None:
    """Input that is not a valid address still loses everything past group three."""
    assert redact_ipv6("zz:yy:xx:ww") == "zz:yy:xx::"


def test_redact_ipv6_returns_canonical_prefix() -> None:
    """Zero groups inside the prefix collapse in the redacted form."""
    assert redact_ipv6("2001:0db8:0:5678::1") == "2001:db8::"
