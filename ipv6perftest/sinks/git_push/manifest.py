"""Direct git push sink manifest."""

from ipv6perftest.sinks.git_push.config import GitPushConfig
from ipv6perftest.sinks.git_push.sink import GitPushSink
from ipv6perftest.sinks.manifest import SinkManifest

git_push_manifest = SinkManifest(
    config_cls=GitPushConfig,
    sink_factory=GitPushSink.from_config,
    required_executables=("git",),
)
