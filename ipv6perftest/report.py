"""Assembly and rendering of result records."""

import json

from ipv6perftest.models.record import ResultRecord, SiteRecord, TestPointMetadata
from ipv6perftest.models.result import RunSummary, SiteResult

RESULTS_DIRECTORY = "test-runs/individual"


def assemble(summary: RunSummary, metadata: TestPointMetadata) -> ResultRecord:
    """Merge a run summary and test point metadata into a flat record.

    Metadata fields that were not detected stay None so they are omitted from
    the serialized record instead of showing up empty.
    """
    return ResultRecord(
        test_point_id=metadata.test_point_id,
        location=metadata.location,
        timestamp=summary.timestamp,
        score=summary.score,
        ipv4_success=summary.ipv4_success,
        ipv6_success=summary.ipv6_success,
        site_test_count=summary.site_count,
        ipv4_success_count=summary.ipv4_successes,
        ipv6_success_count=summary.ipv6_successes,
        asn=metadata.asn,
        ipv4_prefix=metadata.ipv4_prefix,
        ipv6_prefix=metadata.ipv6_prefix,
        sites=[site_record(site) for site in summary.sites],
    )


def site_record(site: SiteResult) -> SiteRecord:
    """Flatten one site result."""
    return SiteRecord(
        name=site.target.name,
        url=site.target.url,
        ipv4_success=site.ipv4.success,
        ipv6_success=site.ipv6.success,
        ipv4_latency_ms=site.ipv4.latency_ms,
        ipv6_latency_ms=site.ipv6.latency_ms,
        ipv4_error=site.ipv4.error,
        ipv6_error=site.ipv6.error,
    )


def record_date(record: ResultRecord) -> str:
    """UTC date of the run as YYYY-MM-DD."""
    return record.to_json_dict()["timestamp"][:10]


def record_json(record: ResultRecord) -> str:
    """Pretty-printed JSON document for a record."""
    return json.dumps(record.to_json_dict(), indent=2)


def results_path(record: ResultRecord) -> str:
    """Repository path where a record is stored, keyed by test point and date."""
    return f"{RESULTS_DIRECTORY}/{record.test_point_id}-{record_date(record)}.json"


def issue_title(record: ResultRecord) -> str:
    """Title for an issue or pull request carrying a record."""
    return f"IPv6 Test Results: {record.test_point_id} - {record_date(record)}"


def issue_body(record: ResultRecord) -> str:
    """Markdown body for an issue or pull request carrying a record."""
    timestamp = record.to_json_dict()["timestamp"]
    return (
        "## IPv6 Connectivity Test Results\n\n"
        f"**Test Point:** {record.test_point_id}\n"
        f"**Location:** {record.location}\n"
        f"**Timestamp:** {timestamp}\n\n"
        "### Results\n"
        f"```json\n{record_json(record)}\n```\n\n"
        "---\n"
        "*Submitted by ipv6perftest*"
    )


def connectivity_verdict(
    ipv4_successes: int, ipv6_successes: int
) -> tuple[bool, str] | None:
    """Assess IPv6 connectivity relative to IPv4.

    Returns:
        ``(healthy, message)``, or None when nothing was reachable at all

    """
    if ipv6_successes == 0 and ipv4_successes > 0:
        return False, "No IPv6 connectivity detected. Your network may be IPv4-only."
    if 0 < ipv6_successes < ipv4_successes:
        return False, (
            "Partial IPv6 connectivity. Some sites may not have IPv6 "
            "or your connection is unstable."
        )
    if ipv6_successes > 0:
        return True, "Good IPv6 connectivity!"
    return None
