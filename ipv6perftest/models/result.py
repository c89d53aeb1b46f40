"""Models for probe outcomes and run summaries."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from ipv6perftest.models.target import Target

type Family = Literal[4, 6]

FAMILIES: Sequence[Family] = (4, 6)


@dataclass(frozen=True, kw_only=True)
class ProbeOutcome:
    """Result of a single connectivity attempt over one IP family.

    ``latency`` is set only on success and ``error`` only on failure.
    """

    family: Family
    success: bool
    latency: float | None = None
    error: str | None = None

    @classmethod
    def succeeded(cls, family: Family, latency: float) -> "ProbeOutcome":
        """Build a successful outcome with the measured latency in seconds."""
        return cls(family=family, success=True, latency=latency)

    @classmethod
    def failed(cls, family: Family, error: str) -> "ProbeOutcome":
        """Build a failed outcome carrying a readable cause."""
        return cls(family=family, success=False, error=error)

    @property
    def latency_ms(self) -> int | None:
        """Latency rounded down to whole milliseconds."""
        if self.latency is None:
            return None
        return int(self.latency * 1000)


@dataclass(frozen=True, kw_only=True)
class SiteResult:
    """Both family outcomes for one target."""

    target: Target
    ipv4: ProbeOutcome
    ipv6: ProbeOutcome

    def __post_init__(self) -> None:
        if self.ipv4.family != 4 or self.ipv6.family != 6:
            raise ValueError(
                f"Outcome families do not match slots for {self.target.name}: "
                f"ipv4={self.ipv4.family} ipv6={self.ipv6.family}"
            )

    def outcome(self, family: Family) -> ProbeOutcome:
        """Return the outcome for the given family."""
        return self.ipv4 if family == 4 else self.ipv6


@dataclass(frozen=True, kw_only=True)
class RunSummary:
    """Aggregate of a full run, sites kept in target list order."""

    sites: Sequence[SiteResult]
    ipv4_successes: int
    ipv6_successes: int
    score: int
    ipv4_success: bool
    ipv6_success: bool
    timestamp: datetime

    @property
    def site_count(self) -> int:
        """Number of targets probed."""
        return len(self.sites)
