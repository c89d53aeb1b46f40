"""Detection of test point metadata: identifier, public prefixes and ASN."""

import asyncio
import ipaddress
import logging
import socket

import aiohttp

from ipv6perftest.models.record import TestPointMetadata
from ipv6perftest.models.result import Family
from ipv6perftest.probe import ADDRESS_FAMILIES
from ipv6perftest.redaction import redact_ipv4, redact_ipv6

log = logging.getLogger(__name__)

IPV4_ECHO_URL = "https://api.ipify.org"
IPV6_ECHO_URL = "https://api64.ipify.org"
ASN_LOOKUP_URL = "https://ipinfo.io/{address}/org"

LOOKUP_TIMEOUT = 5.0


def local_hostname() -> str:
    """Return the machine hostname, or "unknown" when it cannot be read."""
    try:
        return socket.gethostname() or "unknown"
    except OSError:
        return "unknown"


async def fetch_text(
    url: str, *, timeout: float = LOOKUP_TIMEOUT, family: Family | None = None
) -> str | None:
    """GET a small plain-text document, optionally over a single IP family.

    Returns the stripped body, or None when the request fails for any reason.
    """
    connector = aiohttp.TCPConnector(
        family=ADDRESS_FAMILIES[family] if family else socket.AF_UNSPEC
    )
    try:
        async with (
            aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as session,
            session.get(url) as response,
        ):
            if response.status != 200:
                log.debug("Lookup %s returned HTTP %d", url, response.status)
                return None
            return (await response.text()).strip()
    except (aiohttp.ClientError, TimeoutError, OSError) as exc:
        log.debug("Lookup %s failed: %s", url, exc)
        return None


async def detect_public_address(
    family: Family, *, timeout: float = LOOKUP_TIMEOUT
) -> str | None:
    """Ask an IP echo service which public address this host uses."""
    url = IPV4_ECHO_URL if family == 4 else IPV6_ECHO_URL
    body = await fetch_text(url, timeout=timeout, family=family)
    if not body:
        return None

    try:
        address = ipaddress.ip_address(body)
    except ValueError:
        log.debug("Ignoring non-address answer from %s: %.40r", url, body)
        return None

    if address.version != family:
        log.debug("Echo service answered IPv%d for IPv%d", address.version, family)
        return None
    return str(address)


async def detect_asn(address: str, *, timeout: float = LOOKUP_TIMEOUT) -> str | None:
    """Look up the AS number announcing ``address``.

    The lookup service answers ``"AS64500 Example Networks"``; only the first
    word is kept.
    """
    body = await fetch_text(ASN_LOOKUP_URL.format(address=address), timeout=timeout)
    if not body:
        return None
    return body.split()[0]


async def detect_test_point_metadata(
    *,
    test_point_id: str | None = None,
    location: str | None = None,
    timeout: float = LOOKUP_TIMEOUT,
) -> TestPointMetadata:
    """Resolve identifying metadata for this vantage point.

    IPv4 and IPv6 detection run concurrently; the ASN lookup follows the IPv4
    answer. Raw addresses are redacted before they are stored, and anything
    that cannot be detected is left as None.

    Args:
        test_point_id: Explicit identifier; defaults to the hostname
        location: Free-form location; defaults to "unknown"
        timeout: Timeout in seconds for each lookup

    """

    async def ipv4_and_asn() -> tuple[str | None, str | None]:
        address = await detect_public_address(4, timeout=timeout)
        if address is None:
            return None, None
        return address, await detect_asn(address, timeout=timeout)

    (ipv4, asn), ipv6 = await asyncio.gather(
        ipv4_and_asn(), detect_public_address(6, timeout=timeout)
    )

    return TestPointMetadata(
        test_point_id=test_point_id or local_hostname(),
        location=location or "unknown",
        asn=asn,
        ipv4_prefix=redact_ipv4(ipv4) if ipv4 else None,
        ipv6_prefix=redact_ipv6(ipv6) if ipv6 else None,
    )
