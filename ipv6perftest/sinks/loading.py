"""Loading and validation of sinks from entry points."""

import shutil
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Any

from pydantic import BaseModel

from ipv6perftest.config import ConfigurationError
from ipv6perftest.sinks.manifest import SinkManifest

ENTRY_POINT_GROUP = "ipv6perftest.sinks"


class SinkNotFoundError(Exception):
    """Raised when a sink is not found."""


@dataclass(frozen=True, kw_only=True)
class SelectedSink:
    """A sink chosen for this run together with its validated configuration."""

    key: str
    manifest: SinkManifest[Any]
    config: BaseModel


def load_sink_manifest(key: str) -> SinkManifest[Any]:
    """Load a sink manifest by key.

    Args:
        key: The sink key as registered in pyproject.toml
             (e.g., "collector", "gh-cli")

    Returns:
        The sink manifest instance

    Raises:
        SinkNotFoundError: If no sink with the given key is found

    """
    entries = entry_points(group=ENTRY_POINT_GROUP)

    for entry in entries:
        if entry.name == key:
            manifest: SinkManifest[Any] = entry.load()
            return manifest

    available = [e.name for e in entries]
    raise SinkNotFoundError(f"Sink '{key}' not found. Available sinks: {available}")


def select_sinks(configs: Mapping[str, Mapping[str, Any]]) -> Sequence[SelectedSink]:
    """Load and validate every requested sink before any probing starts.

    Raises:
        SinkNotFoundError: If a key does not match a registered sink
        pydantic.ValidationError: If a sink configuration is invalid
        ConfigurationError: If an executable required by a sink is missing

    """
    selected: list[SelectedSink] = []
    for key, raw_config in configs.items():
        manifest = load_sink_manifest(key)
        config = manifest.config_cls(**raw_config)

        for executable in manifest.required_executables:
            if shutil.which(executable) is None:
                raise ConfigurationError(
                    f"'{executable}' is required for the {key} sink but was not "
                    "found on PATH"
                )

        selected.append(SelectedSink(key=key, manifest=manifest, config=config))
    return selected
