"""Remote collector sink module."""

from ipv6perftest.sinks.collector.config import CollectorConfig
from ipv6perftest.sinks.collector.manifest import collector_manifest
from ipv6perftest.sinks.collector.sink import CollectorSink

__all__ = ["CollectorConfig", "CollectorSink", "collector_manifest"]
