"""Single-family HTTP connectivity probe."""

import asyncio
import logging
import socket
import ssl
from collections.abc import Mapping
from dataclasses import dataclass

import aiohttp

from ipv6perftest.models.result import Family, ProbeOutcome
from ipv6perftest.models.target import Target

log = logging.getLogger(__name__)

ADDRESS_FAMILIES: Mapping[Family, socket.AddressFamily] = {
    4: socket.AF_INET,
    6: socket.AF_INET6,
}

DEFAULT_USER_AGENT = "ipv6perftest"


def describe_error(exc: BaseException, family: Family) -> str:
    """Turn a probe exception into a short, human-readable cause."""
    if isinstance(exc, aiohttp.TooManyRedirects):
        return "too many redirects"
    if isinstance(exc, aiohttp.ClientConnectorCertificateError):
        return f"TLS certificate error: {exc.certificate_error}"
    if isinstance(exc, aiohttp.ClientSSLError | ssl.SSLError):
        return f"TLS error: {exc}"
    if isinstance(exc, aiohttp.ClientConnectorError):
        if isinstance(exc.os_error, socket.gaierror):
            return f"DNS resolution failed for IPv{family}: {exc.host}"
        return f"connection failed: {exc.os_error.strerror or exc.os_error}"
    if isinstance(exc, TimeoutError):
        return "timeout"
    if isinstance(exc, aiohttp.ClientResponseError):
        return f"HTTP {exc.status}: {exc.message}"
    return str(exc) or type(exc).__name__


@dataclass(frozen=True, kw_only=True)
class SiteProbe:
    """Checks whether a site answers over one IP family.

    Every call opens its own session and connector with keep-alive disabled,
    so no connection is shared between probes or families.
    """

    # aiohttp treats a cap of 0 as unlimited, so 0 disables redirects instead.
    max_redirects: int = 3
    read_size: int = 1024
    user_agent: str = DEFAULT_USER_AGENT

    async def probe(
        self, target: Target, family: Family, timeout: float
    ) -> ProbeOutcome:
        """Request the target over the given family and report the outcome.

        Args:
            target: Site to request
            family: 4 or 6; the connection never falls back to the other family
            timeout: Upper bound in seconds for the whole attempt

        Returns:
            Successful outcome with latency to the status line, or a failed
            outcome describing the cause. Network errors are never raised.

        """
        loop = asyncio.get_running_loop()
        connector = aiohttp.TCPConnector(
            family=ADDRESS_FAMILIES[family], force_close=True
        )
        start = loop.time()

        try:
            async with (
                aiohttp.ClientSession(
                    connector=connector,
                    timeout=aiohttp.ClientTimeout(total=timeout),
                    headers={"User-Agent": self.user_agent},
                ) as session,
                session.get(
                    target.url,
                    allow_redirects=self.max_redirects > 0,
                    max_redirects=self.max_redirects,
                ) as response,
            ):
                latency = loop.time() - start
                await response.content.read(self.read_size)
                status = response.status
        except (aiohttp.ClientError, TimeoutError, OSError) as exc:
            error = describe_error(exc, family)
            log.debug("Probe %s over IPv%d failed: %s", target.name, family, error)
            return ProbeOutcome.failed(family, error)

        if not 200 <= status < 400:
            log.debug("Probe %s over IPv%d got HTTP %d", target.name, family, status)
            return ProbeOutcome.failed(family, f"HTTP {status}")

        log.debug(
            "Probe %s over IPv%d succeeded in %.0fms",
            target.name,
            family,
            latency * 1000,
        )
        return ProbeOutcome.succeeded(family, latency)
