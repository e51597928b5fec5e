"""Shared fixtures for cachefolio tests."""

import tempfile
from pathlib import Path

import pytest

from cachefolio.policy import ttl as ttl_policy


class FakeClock:
    """Controllable replacement for ttl.current_time."""

    def __init__(self, now: int = 1_700_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    """Freeze cache time; advance it with clock.advance()."""
    fake = FakeClock()
    monkeypatch.setattr(ttl_policy, "current_time", fake)
    return fake


@pytest.fixture
def temp_cache_dir():
    """Create temporary cache directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
