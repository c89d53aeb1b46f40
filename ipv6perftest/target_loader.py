"""Load target lists from YAML files."""

import asyncio
from collections.abc import Sequence
from pathlib import Path

import yaml
from pydantic import ValidationError

from ipv6perftest.models.target import Target, TargetList


async def load_targets(path: Path) -> Sequence[Target]:
    """Load and validate a target file.

    Expected format::

        targets:
          - name: Wikipedia
            url: https://www.wikipedia.org

    Args:
        path: Path to the YAML file

    Returns:
        Targets in file order

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty, not valid YAML, or does not match
            the schema

    """
    if not path.is_file():
        raise FileNotFoundError(f"Target file not found: {path}")

    content = await asyncio.to_thread(path.read_text, encoding="utf-8")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        raise ValueError(f"Empty target file: {path}")

    try:
        return TargetList.model_validate(data).targets
    except ValidationError as e:
        raise ValueError(f"Invalid target list schema in {path}: {e}") from e
