"""GitHub REST API sink manifest."""

from ipv6perftest.sinks.github_api.config import GitHubAPIConfig
from ipv6perftest.sinks.github_api.sink import GitHubAPISink
from ipv6perftest.sinks.manifest import SinkManifest

github_api_manifest = SinkManifest(
    config_cls=GitHubAPIConfig,
    sink_factory=GitHubAPISink.from_config,
)
