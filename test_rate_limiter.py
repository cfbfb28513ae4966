#!/usr/bin/env python3
"""
Rate Limiter Test Script
Tests the RateLimiter class with a fake clock so no real time passes
"""
import pytest

from grant_portal.services.rate_limiter import RateLimiter


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def make_limiter(max_calls=5, time_window=10):
    clock = FakeClock()
    return RateLimiter(max_calls=max_calls, time_window=time_window, clock=clock, sleep=clock.sleep), clock


def test_calls_within_limit_do_not_wait():
    limiter, clock = make_limiter()
    for _ in range(5):
        assert limiter.wait_if_needed() == 0
    assert clock.sleeps == []
    assert limiter.get_remaining_calls() == 0


def test_call_over_limit_waits_for_oldest_to_expire():
    limiter, clock = make_limiter()
    for _ in range(5):
        limiter.wait_if_needed()
        clock.now += 1

    # Oldest call at t=0, window 10s, now t=5
    assert limiter.wait_if_needed() == pytest.approx(5)
    assert clock.now == pytest.approx(10)


def test_window_slides():
    limiter, clock = make_limiter(max_calls=2, time_window=10)
    limiter.wait_if_needed()
    clock.now = 6
    limiter.wait_if_needed()
    clock.now = 10
    # First call expired, one slot free
    assert limiter.get_remaining_calls() == 1
    assert limiter.wait_if_needed() == 0


def test_reset():
    limiter, clock = make_limiter(max_calls=1)
    limiter.wait_if_needed()
    limiter.reset()
    assert limiter.wait_if_needed() == 0


def test_invalid_max_calls():
    with pytest.raises(ValueError):
        RateLimiter(max_calls=0)
