"""Direct git push sink module."""

from ipv6perftest.sinks.git_push.config import GitPushConfig
from ipv6perftest.sinks.git_push.manifest import git_push_manifest
from ipv6perftest.sinks.git_push.sink import GitPushSink

__all__ = ["GitPushConfig", "GitPushSink", "git_push_manifest"]
