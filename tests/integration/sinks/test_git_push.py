"""Integration tests for the direct git push sink."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from ipv6perftest.sinks.git_push import GitPushConfig, GitPushSink
from ipv6perftest.testing.factories import result_record

type GitFn = Callable[..., str]


async def test_pushes_record_file(remote_repo: Path, git: GitFn) -> None:
    """Commits the record under test-runs/individual and pushes it."""
    record = result_record(test_point_id="tp-1")
    config = GitPushConfig(repo_url=str(remote_repo), branch="main")

    async with GitPushSink.from_config(config) as sink:
        url = await sink.submit(record)

    assert url is None
    content = git(
        "show", "main:test-runs/individual/tp-1-2099-01-02.json", cwd=remote_repo
    )
    assert json.loads(content) == record.to_json_dict()
    message = git("log", "-1", "--format=%s", "main", cwd=remote_repo)
    assert message == "Add test results for tp-1 - 2099-01-02"


async def test_keeps_existing_history(remote_repo: Path, git: GitFn) -> None:
    """Successive submissions add files without rewriting earlier commits."""
    config = GitPushConfig(repo_url=str(remote_repo))

    async with GitPushSink.from_config(config) as sink:
        await sink.submit(result_record(test_point_id="tp-1"))
        await sink.submit(result_record(test_point_id="tp-2"))

    files = git("ls-tree", "-r", "--name-only", "main", cwd=remote_repo).splitlines()
    assert files == [
        "README.md",
        "test-runs/individual/tp-1-2099-01-02.json",
        "test-runs/individual/tp-2-2099-01-02.json",
    ]


async def test_missing_branch_raises(remote_repo: Path) -> None:
    """Fails when the branch does not exist on the remote."""
    config = GitPushConfig(repo_url=str(remote_repo), branch="does-not-exist")

    async with GitPushSink.from_config(config) as sink:
        with pytest.raises(RuntimeError, match="git clone failed"):
            await sink.submit(result_record())
