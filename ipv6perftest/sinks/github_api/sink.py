"""GitHub REST API sink implementation."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from ipv6perftest.models.record import ResultRecord
from ipv6perftest.report import issue_body, issue_title
from ipv6perftest.sinks.base import ResultSink
from ipv6perftest.sinks.github_api.config import GitHubAPIConfig
from ipv6perftest.sinks.github_api.models import Issue

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class GitHubAPISink(ResultSink):
    """Opens an issue carrying the record through the GitHub REST API."""

    config: GitHubAPIConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GitHubAPIConfig
    ) -> AsyncGenerator["GitHubAPISink", None]:
        """Create sink with managed session lifecycle."""
        headers = {
            "Authorization": f"token {config.token.get_secret_value()}",
            "Accept": "application/vnd.github.v3+json",
        }
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=30),
        ) as session:
            yield cls(config=config, session=session)

    async def submit(self, record: ResultRecord) -> str | None:
        """Create the issue and return its URL."""
        url = f"/repos/{self.config.repo}/issues"
        payload = {
            "title": issue_title(record),
            "body": issue_body(record),
            "labels": list(self.config.labels),
        }

        log.info("Creating GitHub issue: repo=%s", self.config.repo)

        async with self.session.post(url, json=payload) as response:
            if response.status != 201:
                text = await response.text()
                raise RuntimeError(
                    f"Failed to create GitHub issue: {response.status} {text}"
                )
            data = await response.json()

        issue = Issue.model_validate(data)
        log.info("Created issue #%d: %s", issue.number, issue.html_url)
        return issue.html_url
