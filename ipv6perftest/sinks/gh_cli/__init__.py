"""GitHub CLI sink module."""

from ipv6perftest.sinks.gh_cli.config import GhCliConfig
from ipv6perftest.sinks.gh_cli.manifest import gh_cli_manifest
from ipv6perftest.sinks.gh_cli.sink import GhCliSink

__all__ = ["GhCliConfig", "GhCliSink", "gh_cli_manifest"]
