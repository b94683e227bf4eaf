"""Tests for potkit.core.timestamps."""

from potkit.core import timestamps
from potkit.core.timestamps import elapsed_ms, now_ms


class TestNowMs:
    def test_returns_int(self):
        assert isinstance(now_ms(), int)

    def test_is_monotonic(self):
        first = now_ms()
        assert now_ms() >= first


class TestElapsedMs:
    def test_explicit_current(self):
        assert elapsed_ms(100, 250) == 150

    def test_defaults_to_clock(self, clock):
        clock.advance(25)
        assert elapsed_ms(clock.now - 25) == 25

    def test_clock_fixture_patches_module(self, clock):
        assert timestamps.now_ms() == clock.now
