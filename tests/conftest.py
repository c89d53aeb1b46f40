"""Shared fixtures."""

from collections.abc import Iterator

import pytest
from aioresponses import aioresponses as aioresponses_cls


@pytest.fixture
def aioresponses() -> Iterator[aioresponses_cls]:
    """Mock every aiohttp request made during the test."""
    with aioresponses_cls() as mocked:
        yield mocked
