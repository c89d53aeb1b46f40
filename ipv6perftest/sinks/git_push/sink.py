"""Direct git push sink implementation."""

import logging
import tempfile
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from ipv6perftest.models.record import ResultRecord
from ipv6perftest.report import record_date, record_json, results_path
from ipv6perftest.sinks.base import ResultSink
from ipv6perftest.sinks.commands import run_command
from ipv6perftest.sinks.git_push.config import GitPushConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class GitPushSink(ResultSink):
    """Commits records as JSON files and pushes them to a git repository."""

    config: GitPushConfig

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GitPushConfig
    ) -> AsyncGenerator["GitPushSink", None]:
        """Create sink; it holds no resources between submissions."""
        yield cls(config=config)

    async def submit(self, record: ResultRecord) -> str | None:
        """Clone the branch, add the record file, commit and push."""
        filename = results_path(record)

        log.info(
            "Pushing results: repo=%s, branch=%s, path=%s",
            self.config.repo_url,
            self.config.branch,
            filename,
        )

        with tempfile.TemporaryDirectory(prefix="ipv6perftest-") as tmp:
            workdir = Path(tmp)
            await run_command(
                "git",
                "clone",
                "--depth",
                "1",
                "--branch",
                self.config.branch,
                self.config.repo_url,
                ".",
                cwd=workdir,
            )

            file_path = workdir / filename
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(record_json(record), encoding="utf-8")

            await run_command("git", "add", filename, cwd=workdir)
            await run_command(
                "git",
                "commit",
                "-m",
                f"Add test results for {record.test_point_id} - {record_date(record)}",
                cwd=workdir,
            )
            await run_command("git", "push", "origin", self.config.branch, cwd=workdir)

        return None
