"""Remote collector sink manifest."""

from ipv6perftest.sinks.collector.config import CollectorConfig
from ipv6perftest.sinks.collector.sink import CollectorSink
from ipv6perftest.sinks.manifest import SinkManifest

collector_manifest = SinkManifest(
    config_cls=CollectorConfig,
    sink_factory=CollectorSink.from_config,
)
