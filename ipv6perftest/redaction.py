"""Reduce public addresses to coarse prefixes before they are reported."""

import ipaddress


def redact_ipv4(address: str) -> str:
    """Keep the first three octets of a dotted quad (/24).

    Input that is not made of four dot-separated parts is returned unchanged.
    """
    parts = address.split(".")
    if len(parts) != 4:
        return address
    return f"{parts[0]}.{parts[1]}.{parts[2]}.0"


def redact_ipv6(address: str) -> str:
    """Keep the first three groups of an IPv6 address (/48).

    Compressed forms such as ``2001:db8::1`` are expanded before truncation.
    The prefix is returned in canonical compressed form: leading zeros are
    dropped and zero groups collapse, so ``2001:0db8:0:5678::1`` becomes
    ``2001:db8::`` rather than ``2001:0db8:0::``. Both name the same /48.
    Input with fewer than three colon-separated groups is returned unchanged.
    """
    try:
        parsed = ipaddress.IPv6Address(address)
    except ValueError:
        parts = address.split(":")
        if len(parts) < 3:
            return address
        return f"{parts[0]}:{parts[1]}:{parts[2]}::"

    network = ipaddress.IPv6Network((parsed, 48), strict=False)
    prefix = network.network_address.compressed
    return prefix if prefix.endswith("::") else f"{prefix}::"
