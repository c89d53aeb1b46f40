"""GitHub REST API sink module."""

from ipv6perftest.sinks.github_api.config import GitHubAPIConfig
from ipv6perftest.sinks.github_api.manifest import github_api_manifest
from ipv6perftest.sinks.github_api.sink import GitHubAPISink

__all__ = ["GitHubAPIConfig", "GitHubAPISink", "github_api_manifest"]
