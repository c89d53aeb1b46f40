"""Run configuration resolved from flags, environment variables and defaults.

Environment variables are only read here, once, by the entry point. The
resulting ``RunConfig`` is passed explicitly to everything else.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ipv6perftest.scoring import ScoringPolicy

DEFAULT_COLLECTOR_URL = "https://ipv6.army/api/test/trigger"
DEFAULT_GH_METHOD = "issue"
DEFAULT_GIT_BRANCH = "main"


class ConfigurationError(Exception):
    """Raised when the requested configuration cannot be satisfied."""


class ProbeSettings(BaseModel):
    """Timing and concurrency settings for the connectivity engine."""

    timeout: float = Field(default=10.0, gt=0, description="Per-probe timeout (s)")
    deadline: float | None = Field(
        default=None, gt=0, description="Optional bound for the whole run (s)"
    )
    concurrency: int = Field(default=16, gt=0, description="Concurrent probes")
    max_redirects: int = Field(default=3, ge=1, le=10)
    scoring: ScoringPolicy = Field(default_factory=ScoringPolicy)


class RunConfig(BaseModel):
    """Everything a run needs, built once by the CLI."""

    test_point_id: str | None = None
    location: str | None = None
    targets_file: Path | None = None
    verbose: bool = False
    probe: ProbeSettings = Field(default_factory=ProbeSettings)
    sinks: Mapping[str, Mapping[str, Any]] = Field(
        default_factory=dict,
        description="Raw configuration per selected sink key, validated later",
    )


def resolve(
    flag_value: str | None,
    env_key: str,
    environ: Mapping[str, str],
    default: str | None = None,
) -> str | None:
    """Return the first non-empty value of: flag, environment variable, default."""
    if flag_value:
        return flag_value
    if env_value := environ.get(env_key):
        return env_value
    return default


def without_empty(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop unset entries so pydantic reports missing required fields."""
    return {key: value for key, value in values.items() if value not in (None, "")}


def sink_configs(
    *,
    submit_collector: bool = False,
    submit_gh: bool = False,
    submit_git: bool = False,
    submit_api: bool = False,
    collector_url: str | None = None,
    collector_token: str | None = None,
    gh_repo: str | None = None,
    gh_method: str | None = None,
    gh_token: str | None = None,
    git_repo: str | None = None,
    git_branch: str | None = None,
    environ: Mapping[str, str],
) -> dict[str, dict[str, Any]]:
    """Build raw configuration for every selected sink, keyed by sink key."""
    configs: dict[str, dict[str, Any]] = {}
    repo = resolve(gh_repo, "GH_REPO", environ)

    if submit_collector:
        configs["collector"] = without_empty(
            {
                "url": resolve(
                    collector_url, "API_URL", environ, DEFAULT_COLLECTOR_URL
                ),
                "token": resolve(collector_token, "IPV6_ARMY_TOKEN", environ),
            }
        )
    if submit_gh:
        configs["gh-cli"] = without_empty(
            {
                "repo": repo,
                "method": resolve(gh_method, "GH_METHOD", environ, DEFAULT_GH_METHOD),
            }
        )
    if submit_git:
        configs["git-push"] = without_empty(
            {
                "repo_url": resolve(git_repo, "GIT_REPO", environ),
                "branch": resolve(
                    git_branch, "GIT_BRANCH", environ, DEFAULT_GIT_BRANCH
                ),
            }
        )
    if submit_api:
        configs["github-api"] = without_empty(
            {"repo": repo, "token": resolve(gh_token, "GITHUB_TOKEN", environ)}
        )

    return configs
