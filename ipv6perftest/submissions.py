"""Delivery of a result record to every selected sink."""

import asyncio
import logging
from collections.abc import Sequence
from contextlib import AsyncExitStack

from ipv6perftest.models.record import ResultRecord
from ipv6perftest.sinks.base import SubmissionResult
from ipv6perftest.sinks.loading import SelectedSink

log = logging.getLogger(__name__)


async def submit_record(
    selected: Sequence[SelectedSink], record: ResultRecord
) -> Sequence[SubmissionResult]:
    """Submit a record to all selected sinks concurrently.

    Each sink reports its own outcome; a failing sink is logged and recorded
    as a failed submission without affecting the others.

    Returns:
        One result per selected sink, in selection order

    """
    if not selected:
        return []

    log.info("Submitting results to %d sink(s)...", len(selected))

    async with AsyncExitStack() as stack:
        sinks = [
            await stack.enter_async_context(entry.manifest.sink_factory(entry.config))
            for entry in selected
        ]
        outcomes = await asyncio.gather(
            *(sink.submit(record) for sink in sinks), return_exceptions=True
        )

    return [
        _to_submission_result(entry.key, outcome)
        for entry, outcome in zip(selected, outcomes, strict=True)
    ]


def _to_submission_result(
    key: str, outcome: str | None | BaseException
) -> SubmissionResult:
    if isinstance(outcome, BaseException):
        if not isinstance(outcome, Exception):
            raise outcome
        log.warning("Submission to %s failed: %s", key, outcome)
        return SubmissionResult(sink=key, status="failure", message=str(outcome))

    log.info("Submission to %s succeeded", key)
    return SubmissionResult(sink=key, status="success", url=outcome)
