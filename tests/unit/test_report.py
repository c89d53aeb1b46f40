"""Tests for record assembly and rendering."""

import json

import pytest

from ipv6perftest.engine import summarize
from ipv6perftest.models.target import Target
from ipv6perftest.report import (
    assemble,
    connectivity_verdict,
    issue_body,
    issue_title,
    record_json,
    results_path,
)
from ipv6perftest.scoring import MAX_SCORE, ScoringPolicy
from ipv6perftest.testing.factories import (
    FIXED_TIMESTAMP,
    TestPointMetadataFactory,
    result_record,
    site_result,
)


def test_assemble_merges_summary_and_metadata() -> None:
    """Copies counts, score and metadata into the record."""
    sites = [
        site_result(Target(name="A", url="https://a.test")),
        site_result(Target(name="B", url="https://b.test"), ipv6=False),
    ]
    summary = summarize(sites, timestamp=FIXED_TIMESTAMP)
    metadata = TestPointMetadataFactory.build(test_point_id="tp-1", location="Oslo")

    record = assemble(summary, metadata)

    assert record.test_point_id == "tp-1"
    assert record.location == "Oslo"
    assert record.timestamp == FIXED_TIMESTAMP
    assert record.score == 7
    assert record.site_test_count == 2
    assert record.ipv4_success_count == 2
    assert record.ipv6_success_count == 1
    assert record.ipv4_success
    assert record.ipv6_success
    assert record.asn == metadata.asn
    assert record.ipv4_prefix == metadata.ipv4_prefix
    assert record.ipv6_prefix == metadata.ipv6_prefix
    assert [site.name for site in record.sites] == ["A", "B"]
    assert record.sites[1].ipv6_error == "timeout"
    assert record.sites[1].ipv6_latency_ms is None
    assert record.sites[0].ipv4_latency_ms == 50


@pytest.mark.parametrize(
    "policy",
    [
        ScoringPolicy(ipv4_weight=0.0, ipv6_weight=1.0),
        ScoringPolicy(ipv4_weight=1.0, ipv6_weight=0.0),
    ],
)
def test_assemble_accepts_score_from_custom_policy(policy: ScoringPolicy) -> None:
    """Scores from non-default weights stay within the record's bounds."""
    sites = [site_result(), site_result()]
    summary = summarize(sites, policy, timestamp=FIXED_TIMESTAMP)

    record = assemble(summary, TestPointMetadataFactory.build())

    assert record.score == MAX_SCORE


def test_record_json_is_indented_camel_case() -> None:
    """Renders the record as pretty-printed JSON."""
    rendered = record_json(result_record())

    assert rendered.startswith('{\n  "testPointId": "test-point"')
    assert json.loads(rendered)["timestamp"] == "2099-01-02T03:04:05Z"


def test_results_path_uses_test_point_and_date() -> None:
    """Stores records under test-runs/individual keyed by id and date."""
    record = result_record(test_point_id="tp-1")

    assert results_path(record) == "test-runs/individual/tp-1-2099-01-02.json"


def test_issue_title() -> None:
    """Titles carry the test point and the run date."""
    record = result_record(test_point_id="tp-1")

    assert issue_title(record) == "IPv6 Test Results: tp-1 - 2099-01-02"


def test_issue_body_embeds_record() -> None:
    """The body lists identity fields and embeds the JSON document."""
    record = result_record(test_point_id="tp-1", location="Oslo")

    body = issue_body(record)

    assert "**Test Point:** tp-1" in body
    assert "**Location:** Oslo" in body
    assert "**Timestamp:** 2099-01-02T03:04:05Z" in body
    assert f"```json\n{record_json(record)}\n```" in body


@pytest.mark.parametrize(
    ("ipv4", "ipv6", "expected"),
    [
        (10, 0, (False, "No IPv6 connectivity detected.")),
        (10, 5, (False, "Partial IPv6 connectivity.")),
        (10, 10, (True, "Good IPv6 connectivity!")),
        (0, 5, (True, "Good IPv6 connectivity!")),
    ],
)
def test_connectivity_verdict(
    ipv4: int, ipv6: int, expected: tuple[bool, str]
) -> None:
    """Compares IPv6 reachability against IPv4."""
    verdict = connectivity_verdict(ipv4, ipv6)

    assert verdict is not None
    healthy, message = verdict
    assert healthy is expected[0]
    assert message.startswith(expected[1])


def test_connectivity_verdict_without_any_connectivity() -> None:
    """Returns None when nothing was reachable."""
    assert connectivity_verdict(0, 0) is None
