"""Tests for the fixed-window rate limiter."""

import pytest

from infrastress.simulation.rate_limit import RateLimiter, RATE_LIMITS


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestRateLimiter:
    def test_allows_up_to_limit(self):
        limiter = RateLimiter(3, 60, clock=FakeClock())
        assert [limiter.check_and_record("a") for _ in range(4)] == [True, True, True, False]

    def test_keys_are_independent(self):
        limiter = RateLimiter(1, 60, clock=FakeClock())
        assert limiter.check_and_record("a")
        assert limiter.check_and_record("b")
        assert not limiter.check_and_record("a")

    def test_window_resets(self):
        clock = FakeClock()
        limiter = RateLimiter(1, 60, clock=clock)
        assert limiter.check_and_record("a")
        clock.now = 59.9
        assert not limiter.check_and_record("a")
        clock.now = 60.0
        assert limiter.check_and_record("a")

    def test_remaining_and_retry_after(self):
        clock = FakeClock()
        limiter = RateLimiter(5, 60, clock=clock)
        assert limiter.remaining("a") == 5
        assert limiter.retry_after("a") == 0.0
        limiter.check_and_record("a")
        limiter.check_and_record("a")
        clock.now = 15.0
        assert limiter.remaining("a") == 3
        assert limiter.retry_after("a") == pytest.approx(45.0)

    def test_sweep_drops_expired_windows(self):
        clock = FakeClock()
        limiter = RateLimiter(1, 60, clock=clock)
        limiter.check_and_record("a")
        clock.now = 30.0
        limiter.check_and_record("b")
        clock.now = 61.0
        assert limiter.sweep() == 1
        assert len(limiter) == 1

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            RateLimiter(0, 60)
        with pytest.raises(ValueError):
            RateLimiter(10, 0)


class TestPresets:
    def test_preset_values(self):
        assert RATE_LIMITS["simulation"] == (10, 60)
        assert RATE_LIMITS["general"] == (100, 60)

    def test_from_preset(self):
        limiter = RateLimiter.from_preset("ingest", clock=FakeClock())
        assert limiter.max_requests == 20
        assert limiter.window_seconds == 60

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Available: simulation, ingest, explain, general"):
            RateLimiter.from_preset("upload")
