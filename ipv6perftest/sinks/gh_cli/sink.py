"""GitHub CLI sink implementation."""

import logging
import tempfile
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from ipv6perftest.models.record import ResultRecord
from ipv6perftest.report import issue_body, issue_title, record_json, results_path
from ipv6perftest.sinks.base import ResultSink
from ipv6perftest.sinks.commands import run_command
from ipv6perftest.sinks.gh_cli.config import GhCliConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class GhCliSink(ResultSink):
    """Submits records with the ``gh`` command line tool."""

    config: GhCliConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GhCliConfig
    ) -> AsyncGenerator["GhCliSink", None]:
        """Create sink; it holds no resources between submissions."""
        yield cls(config=config)

    async def submit(self, record: ResultRecord) -> str | None:
        """Open an issue or pull request and return its URL."""
        if self.config.method == "pr":
            return await self.create_pull_request(record)
        return await self.create_issue(record)

    async def create_issue(self, record: ResultRecord) -> str | None:
        """Open an issue whose body embeds the record."""
        log.info("Creating issue with gh: repo=%s", self.config.repo)
        output = await run_command(
            "gh",
            "issue",
            "create",
            "--repo",
            self.config.repo,
            "--title",
            issue_title(record),
            "--body",
            issue_body(record),
            cwd=Path.cwd(),
        )
        return output or None

    async def create_pull_request(self, record: ResultRecord) -> str | None:
        """Commit the record on a fresh branch of a shallow clone and open a PR."""
        branch = (
            f"test-results-{record.test_point_id}-"
            f"{record.timestamp.strftime('%Y%m%d%H%M%S')}"
        )
        filename = results_path(record)

        log.info(
            "Creating pull request with gh: repo=%s, branch=%s",
            self.config.repo,
            branch,
        )

        with tempfile.TemporaryDirectory(prefix="ipv6perftest-") as tmp:
            workdir = Path(tmp)
            await run_command(
                "gh",
                "repo",
                "clone",
                self.config.repo,
                ".",
                "--",
                "--depth",
                "1",
                cwd=workdir,
            )
            await run_command("git", "checkout", "-b", branch, cwd=workdir)

            file_path = workdir / filename
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(record_json(record), encoding="utf-8")

            await run_command("git", "add", filename, cwd=workdir)
            await run_command(
                "git",
                "commit",
                "-m",
                f"Add test results for {record.test_point_id}",
                cwd=workdir,
            )
            await run_command("git", "push", "origin", branch, cwd=workdir)
            output = await run_command(
                "gh",
                "pr",
                "create",
                "--repo",
                self.config.repo,
                "--title",
                issue_title(record),
                "--body",
                issue_body(record),
                "--head",
                branch,
                cwd=workdir,
            )

        return output or None
