"""
Shared pytest fixtures for potkit tests.

This module provides:
- A frozen millisecond clock so Pending/PendingStale compare predictably
- structlog reset between tests so captured logs stay isolated
- Auto-marking of tests as unit tests
"""

import sys
from pathlib import Path

import pytest
import structlog

# Ensure potkit package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from potkit.core import timestamps
from potkit.core.settings import get_settings


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark all tests without explicit markers as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if "unit" not in markers:
            item.add_marker(pytest.mark.unit)


class FrozenClock:
    """Stand-in for ``timestamps.now_ms`` that only moves when told to."""

    def __init__(self, start: int = 1_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock(monkeypatch) -> FrozenClock:
    frozen = FrozenClock()
    monkeypatch.setattr(timestamps, "now_ms", frozen)
    return frozen


@pytest.fixture(autouse=True)
def _reset_logging_and_settings():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    get_settings.cache_clear()
