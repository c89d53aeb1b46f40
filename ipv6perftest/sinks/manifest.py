"""Sink manifest definition for the plugin system."""

from collections.abc import Callable, Sequence
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from pydantic import BaseModel

from ipv6perftest.sinks.base import ResultSink


@dataclass(frozen=True, kw_only=True)
class SinkManifest[ConfigT: BaseModel]:
    """Manifest describing a sink plugin.

    The manifest references the configuration class, the factory creating the
    sink from a validated configuration, and the executables that must be on
    PATH for the sink to work.
    """

    config_cls: type[ConfigT]
    sink_factory: Callable[[ConfigT], AbstractAsyncContextManager[ResultSink]]
    required_executables: Sequence[str] = ()
