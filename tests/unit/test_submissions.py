"""Tests for record submission to selected sinks."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import Mock

from pydantic import BaseModel

from ipv6perftest.sinks.base import ResultSink
from ipv6perftest.sinks.loading import SelectedSink
from ipv6perftest.sinks.manifest import SinkManifest
from ipv6perftest.submissions import submit_record
from ipv6perftest.testing.factories import result_record


class EmptyConfig(BaseModel):
    """Configuration without fields."""


def selected_sink(
    key: str, sink: Mock, events: list[str] | None = None
) -> SelectedSink:
    """Wrap a mock sink in a selection entry with a managed lifecycle."""

    @asynccontextmanager
    async def factory(config: EmptyConfig) -> AsyncGenerator[ResultSink, None]:
        if events is not None:
            events.append(f"open {key}")
        yield sink
        if events is not None:
            events.append(f"close {key}")

    manifest = SinkManifest(config_cls=EmptyConfig, sink_factory=factory)
    return SelectedSink(key=key, manifest=manifest, config=EmptyConfig())


async def test_returns_empty_when_no_sinks_selected() -> None:
    """Nothing is submitted without sinks."""
    assert await submit_record([], result_record()) == []


async def test_submits_record_to_every_sink() -> None:
    """Each sink receives the same record and reports success."""
    record = result_record()
    first = Mock(spec=ResultSink)
    first.submit.return_value = "https://github.com/owner/results/issues/1"
    second = Mock(spec=ResultSink)
    second.submit.return_value = None

    results = await submit_record(
        [selected_sink("github-api", first), selected_sink("git-push", second)], record
    )

    first.submit.assert_called_once_with(record)
    second.submit.assert_called_once_with(record)
    assert [(r.sink, r.status, r.url) for r in results] == [
        ("github-api", "success", "https://github.com/owner/results/issues/1"),
        ("git-push", "success", None),
    ]


async def test_failing_sink_does_not_affect_others() -> None:
    """A sink that raises is reported as failed while the others succeed."""
    failing = Mock(spec=ResultSink)
    failing.submit.side_effect = RuntimeError("Collector rejected results (HTTP 401)")
    working = Mock(spec=ResultSink)
    working.submit.return_value = "https://example.test/job/1"

    results = await submit_record(
        [selected_sink("collector", failing), selected_sink("github-api", working)],
        result_record(),
    )

    assert results[0].status == "failure"
    assert results[0].message == "Collector rejected results (HTTP 401)"
    assert results[1].status == "success"
    assert results[1].url == "https://example.test/job/1"


async def test_sinks_are_closed_after_submission() -> None:
    """Every sink context is exited once submissions finish."""
    events: list[str] = []
    sink = Mock(spec=ResultSink)
    sink.submit.return_value = None

    await submit_record(
        [selected_sink("a", sink, events), selected_sink("b", sink, events)],
        result_record(),
    )

    assert events == ["open a", "open b", "close b", "close a"]
