"""Remote collector sink implementation."""

import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp
from pydantic import ValidationError

from ipv6perftest.models.record import ResultRecord
from ipv6perftest.sinks.base import ResultSink
from ipv6perftest.sinks.collector.config import CollectorConfig
from ipv6perftest.sinks.collector.models import CollectorResponse

log = logging.getLogger(__name__)

ACCEPTED_STATUSES = frozenset([200, 201])

STATUS_HINTS: Mapping[int, str] = {
    401: "Check that your API token is correct",
    403: "Check that your API token is correct",
    429: "Rate limit exceeded. Wait before retrying.",
}

SERVER_ERROR_HINT = "Server error. Try again later or contact support."


def status_hint(status: int) -> str | None:
    """Return a remediation hint for a rejected submission, if one applies."""
    if status >= 500:
        return SERVER_ERROR_HINT
    return STATUS_HINTS.get(status)


@dataclass(frozen=True, kw_only=True)
class CollectorSink(ResultSink):
    """Posts result records as JSON to the remote collector."""

    config: CollectorConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: CollectorConfig
    ) -> AsyncGenerator["CollectorSink", None]:
        """Create sink with managed session lifecycle."""
        headers = {
            "Authorization": f"Bearer {config.token.get_secret_value()}",
            "Content-Type": "application/json",
        }
        async with aiohttp.ClientSession(
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=config.timeout),
        ) as session:
            yield cls(config=config, session=session)

    async def submit(self, record: ResultRecord) -> str | None:
        """Post the record and return the workflow URL the collector reports."""
        log.info("Posting results to collector: url=%s", self.config.url)

        async with self.session.post(
            self.config.url, json=record.to_json_dict()
        ) as response:
            if response.status not in ACCEPTED_STATUSES:
                text = await response.text()
                message = f"Collector rejected results (HTTP {response.status}): {text}"
                if hint := status_hint(response.status):
                    message = f"{message}\nHint: {hint}"
                raise RuntimeError(message)

            try:
                ack = CollectorResponse.model_validate(
                    await response.json(content_type=None)
                )
            except (ValueError, ValidationError):
                log.info("Collector accepted results without a JSON acknowledgement")
                return None

        if ack.job_id:
            log.info("Collector job id: %s", ack.job_id)
        if ack.message:
            log.info("Collector message: %s", ack.message)
        return ack.workflow_url
