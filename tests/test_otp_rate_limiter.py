import time

from app.services.OtpRateLimiter import OtpRateLimiter


def test_sixth_attempt_in_window_is_rejected():
    limiter = OtpRateLimiter(points=5, window_seconds=60)
    results = [limiter.consume("10.0.0.1") for _ in range(6)]
    assert results == [True, True, True, True, True, False]
    assert limiter.retry_after("10.0.0.1") > 0


def test_identities_have_separate_budgets():
    limiter = OtpRateLimiter(points=2, window_seconds=60)
    assert limiter.consume("10.0.0.1")
    assert limiter.consume("10.0.0.1")
    assert not limiter.consume("10.0.0.1")
    assert limiter.consume("10.0.0.2")


def test_budget_returns_after_window():
    limiter = OtpRateLimiter(points=1, window_seconds=1)
    assert limiter.consume("10.0.0.1")
    assert not limiter.consume("10.0.0.1")
    time.sleep(1.2)
    assert limiter.consume("10.0.0.1")


def test_reset_clears_all_counters():
    limiter = OtpRateLimiter(points=1, window_seconds=60)
    limiter.consume("10.0.0.1")
    limiter.reset()
    assert limiter.remaining("10.0.0.1") == 1
