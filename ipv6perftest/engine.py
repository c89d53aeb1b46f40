"""Connectivity engine coordinating probes across targets and families."""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from ipv6perftest.models.result import (
    FAMILIES,
    Family,
    ProbeOutcome,
    RunSummary,
    SiteResult,
)
from ipv6perftest.models.target import Target
from ipv6perftest.probe import SiteProbe
from ipv6perftest.scoring import DEFAULT_POLICY, ScoringPolicy, compute_score

log = logging.getLogger(__name__)

CANCELLED = "cancelled"


class EmptyTargetListError(ValueError):
    """Raised when a run is requested without any target."""


type OutcomeSlots = list[list[ProbeOutcome | None]]


@dataclass(frozen=True, kw_only=True)
class ConnectivityEngine:
    """Runs one probe per (target, family) and scores the results."""

    probe: SiteProbe
    policy: ScoringPolicy = field(default=DEFAULT_POLICY)
    concurrency: int = 16

    async def run(
        self,
        targets: Sequence[Target] | None,
        timeout_per_probe: float,
        deadline: float | None = None,
    ) -> RunSummary:
        """Probe every target over IPv4 and IPv6 and build the run summary.

        Args:
            targets: Sites to probe, in display order
            timeout_per_probe: Timeout in seconds applied to each probe
            deadline: Optional bound in seconds for the whole run; probes still
                running when it expires are cancelled and counted as failures

        Returns:
            Summary with sites in the same order as ``targets``

        Raises:
            EmptyTargetListError: If no target is given

        """
        if not targets:
            raise EmptyTargetListError("At least one target is required")

        log.info(
            "Probing %d target(s) over IPv4 and IPv6 (timeout=%.1fs, concurrency=%d)",
            len(targets),
            timeout_per_probe,
            self.concurrency,
        )

        slots: OutcomeSlots = [[None] * len(FAMILIES) for _ in targets]
        semaphore = asyncio.Semaphore(self.concurrency)
        tasks = [
            asyncio.create_task(
                self._probe_into(
                    slots, index, slot, target, family, timeout_per_probe, semaphore
                )
            )
            for index, target in enumerate(targets)
            for slot, family in enumerate(FAMILIES)
        ]

        _, pending = await asyncio.wait(tasks, timeout=deadline)
        if pending:
            log.warning(
                "Run deadline of %.1fs reached, cancelling %d probe(s)",
                deadline,
                len(pending),
            )
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        sites = [
            SiteResult(
                target=target,
                ipv4=slots[index][0] or ProbeOutcome.failed(4, CANCELLED),
                ipv6=slots[index][1] or ProbeOutcome.failed(6, CANCELLED),
            )
            for index, target in enumerate(targets)
        ]
        return summarize(sites, self.policy)

    async def _probe_into(
        self,
        slots: OutcomeSlots,
        index: int,
        slot: int,
        target: Target,
        family: Family,
        timeout: float,
        semaphore: asyncio.Semaphore,
    ) -> None:
        """Run one probe and store its outcome in the slot reserved for it."""
        async with semaphore:
            try:
                outcome = await self.probe.probe(target, family, timeout)
            except Exception as exc:
                log.error(
                    "Probe %s over IPv%d raised: %s",
                    target.name,
                    family,
                    exc,
                    exc_info=exc,
                )
                outcome = ProbeOutcome.failed(family, str(exc) or type(exc).__name__)
        slots[index][slot] = outcome


def summarize(
    sites: Sequence[SiteResult],
    policy: ScoringPolicy = DEFAULT_POLICY,
    timestamp: datetime | None = None,
) -> RunSummary:
    """Count per-family successes and compute the score for finished sites."""
    ipv4_successes = sum(1 for site in sites if site.ipv4.success)
    ipv6_successes = sum(1 for site in sites if site.ipv6.success)
    score = compute_score(ipv4_successes, ipv6_successes, len(sites), policy)

    return RunSummary(
        sites=tuple(sites),
        ipv4_successes=ipv4_successes,
        ipv6_successes=ipv6_successes,
        score=score,
        ipv4_success=ipv4_successes > 0,
        ipv6_success=ipv6_successes > 0,
        timestamp=timestamp or datetime.now(timezone.utc).replace(microsecond=0),
    )
