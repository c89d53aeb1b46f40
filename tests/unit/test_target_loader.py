"""Tests for target file loading."""

from pathlib import Path

import pytest

from ipv6perftest.target_loader import load_targets


async def test_loads_targets_in_file_order(tmp_path: Path) -> None:
    """Returns targets in the order they appear in the file."""
    path = tmp_path / "targets.yaml"
    path.write_text(
        "targets:\n"
        "  - name: Wikipedia\n"
        "    url: https://www.wikipedia.org\n"
        "  - name: GitHub\n"
        "    url: https://github.com\n"
    )

    targets = await load_targets(path)

    assert [target.name for target in targets] == ["Wikipedia", "GitHub"]
    assert targets[1].url == "https://github.com"


async def test_raises_file_not_found(tmp_path: Path) -> None:
    """Raises FileNotFoundError when the file does not exist."""
    with pytest.raises(FileNotFoundError, match="Target file not found"):
        await load_targets(tmp_path / "missing.yaml")


async def test_raises_for_empty_file(tmp_path: Path) -> None:
    """Raises ValueError for an empty file."""
    path = tmp_path / "targets.yaml"
    path.write_text("")

    with pytest.raises(ValueError, match="Empty target file"):
        await load_targets(path)


async def test_raises_for_invalid_yaml(tmp_path: Path) -> None:
    """Raises ValueError for malformed YAML."""
    path = tmp_path / "targets.yaml"
    path.write_text("targets: [unclosed\n")

    with pytest.raises(ValueError, match="Invalid YAML"):
        await load_targets(path)


@pytest.mark.parametrize(
    "content",
    [
        "targets: []\n",
        "targets:\n  - name: Example\n",
        "targets:\n  - name: Example\n    url: ftp://example.com\n",
        "- https://example.com\n",
    ],
)
async def test_raises_for_invalid_schema(tmp_path: Path, content: str) -> None:
    """Raises ValueError when the content does not describe targets."""
    path = tmp_path / "targets.yaml"
    path.write_text(content)

    with pytest.raises(ValueError, match="Invalid target list schema"):
        await load_targets(path)
