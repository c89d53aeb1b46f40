"""Fixtures for integration tests."""

import subprocess
from pathlib import Path
from typing import Protocol

import pytest


class GitFn(Protocol):
    """Protocol for running git commands."""

    def __call__(self, *args: str, cwd: Path) -> str:
        """Run git and return its stripped stdout."""


def _git(*args: str, cwd: Path) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout.strip()


@pytest.fixture(autouse=True)
def git_identity(monkeypatch: pytest.MonkeyPatch) -> None:
    """Give commits made by sinks a fixed author."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


@pytest.fixture
def git() -> GitFn:
    """Return a function running git commands."""
    return _git


@pytest.fixture
def git_repo(tmp_path: Path, git: GitFn) -> Path:
    """Create an initialized git repository with one commit on main."""
    repo = tmp_path / "seed"
    repo.mkdir()
    git("init", cwd=repo)
    git("symbolic-ref", "HEAD", "refs/heads/main", cwd=repo)
    (repo / "README.md").write_text("# Results\n")
    git("add", "README.md", cwd=repo)
    git("commit", "-m", "Initial commit", cwd=repo)
    return repo


@pytest.fixture
def remote_repo(tmp_path: Path, git_repo: Path, git: GitFn) -> Path:
    """Create a bare repository holding the seed repository's main branch."""
    remote = tmp_path / "remote.git"
    git("init", "--bare", str(remote), cwd=tmp_path)
    git("push", str(remote), "main:main", cwd=git_repo)
    return remote
