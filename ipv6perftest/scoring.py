"""Weighted connectivity score."""

import math

from pydantic import ConfigDict, Field, model_validator

from ipv6perftest.models.base import Model

MAX_SCORE = 10


class ScoringPolicy(Model):
    """Weights applied to the per-family success ratios.

    IPv6 counts for more than IPv4 by default since it is the scarcer signal.
    Scores are always on a 0 to ``MAX_SCORE`` scale.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    ipv4_weight: float = Field(default=0.4, ge=0)
    ipv6_weight: float = Field(default=0.6, ge=0)

    @model_validator(mode="after")
    def check_weights(self) -> "ScoringPolicy":
        if not math.isclose(self.ipv4_weight + self.ipv6_weight, 1.0):
            raise ValueError(
                "Scoring weights must add up to 1.0, got "
                f"{self.ipv4_weight} + {self.ipv6_weight}"
            )
        return self


DEFAULT_POLICY = ScoringPolicy()


def compute_score(
    ipv4_successes: int,
    ipv6_successes: int,
    total: int,
    policy: ScoringPolicy = DEFAULT_POLICY,
) -> int:
    """Return ``floor((w4 * p4 + w6 * p6) * 10)`` clamped to ``[0, 10]``.

    Args:
        ipv4_successes: Sites reachable over IPv4
        ipv6_successes: Sites reachable over IPv6
        total: Number of sites probed, must be positive
        policy: Weights to apply

    Raises:
        ValueError: If total is not positive

    """
    if total <= 0:
        raise ValueError(f"Cannot score a run over {total} target(s)")

    ipv4_ratio = ipv4_successes / total
    ipv6_ratio = ipv6_successes / total
    weighted = policy.ipv4_weight * ipv4_ratio + policy.ipv6_weight * ipv6_ratio
    # Rounding first keeps 0.3 * 10 from flooring to 2.
    score = math.floor(round(weighted * MAX_SCORE, 9))
    return max(0, min(MAX_SCORE, score))
