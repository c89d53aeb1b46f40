"""GitHub CLI sink manifest."""

from ipv6perftest.sinks.gh_cli.config import GhCliConfig
from ipv6perftest.sinks.gh_cli.sink import GhCliSink
from ipv6perftest.sinks.manifest import SinkManifest

gh_cli_manifest = SinkManifest(
    config_cls=GhCliConfig,
    sink_factory=GhCliSink.from_config,
    required_executables=("gh", "git"),
)
