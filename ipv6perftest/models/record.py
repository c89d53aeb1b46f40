"""Models for test point metadata and the submission-ready result record."""

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import Field, field_serializer

from ipv6perftest.models.base import Model, RecordModel
from ipv6perftest.scoring import MAX_SCORE


class TestPointMetadata(Model):
    """Identifying, non-measurement data about the vantage point."""

    __test__ = False

    test_point_id: str = Field(..., description="Hostname or explicit override")
    location: str = Field(default="unknown", description="Free-form location")
    asn: str | None = Field(default=None, description="Autonomous system, e.g. AS64500")
    ipv4_prefix: str | None = Field(default=None, description="Redacted IPv4 (/24)")
    ipv6_prefix: str | None = Field(default=None, description="Redacted IPv6 (/48)")


class SiteRecord(RecordModel):
    """Per-site entry of a result record."""

    name: str
    url: str
    ipv4_success: bool
    ipv6_success: bool
    ipv4_latency_ms: int | None = None
    ipv6_latency_ms: int | None = None
    ipv4_error: str | None = None
    ipv6_error: str | None = None


class ResultRecord(RecordModel):
    """Flat record combining a run summary with test point metadata."""

    test_point_id: str
    location: str
    timestamp: datetime
    score: int = Field(..., ge=0, le=MAX_SCORE)
    ipv4_success: bool
    ipv6_success: bool
    site_test_count: int
    ipv4_success_count: int
    ipv6_success_count: int
    asn: str | None = None
    ipv4_prefix: str | None = None
    ipv6_prefix: str | None = None
    sites: Sequence[SiteRecord] = Field(default_factory=tuple)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> str:
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%SZ")

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys, omitting fields that were not detected."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
