"""Tests for the fixed-window rate limiter."""
from studyguide.utils.rate_limit import (
    HOUR_MS,
    RATE_LIMITS,
    InMemoryRateLimitStore,
    check_rate_limit,
    get_client_ip,
)

NOW = 1_700_000_000_000


def test_first_request_opens_window():
    store = InMemoryRateLimitStore()
    result = check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW)
    assert result.allowed
    assert result.remaining == RATE_LIMITS["generate-guide"].max_requests - 1
    assert result.reset_in_ms == HOUR_MS


def test_denies_after_quota():
    store = InMemoryRateLimitStore()
    for _ in range(10):
        assert check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW).allowed

    denied = check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW + 1500)
    assert not denied.allowed
    assert denied.remaining == 0
    assert denied.reset_in_ms == HOUR_MS - 1500
    assert denied.retry_after_s == 3599


def test_clients_and_endpoints_are_separate():
    store = InMemoryRateLimitStore()
    for _ in range(10):
        check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW)

    assert check_rate_limit(store, "5.6.7.8", "generate-guide", now_ms=NOW).allowed
    assert check_rate_limit(store, "1.2.3.4", "parse-syllabus", now_ms=NOW).allowed


def test_window_resets():
    store = InMemoryRateLimitStore()
    for _ in range(11):
        check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW)

    later = check_rate_limit(store, "1.2.3.4", "generate-guide", now_ms=NOW + HOUR_MS + 1)
    assert later.allowed
    assert later.remaining == 9


def test_unknown_endpoint_is_unlimited():
    result = check_rate_limit(InMemoryRateLimitStore(), "x", "health", now_ms=NOW)
    assert (result.allowed, result.remaining, result.reset_in_ms) == (True, 999, 0)


def test_prune_drops_expired_windows():
    store = InMemoryRateLimitStore()
    check_rate_limit(store, "a", "generate-guide", now_ms=NOW)
    check_rate_limit(store, "b", "generate-guide", now_ms=NOW + HOUR_MS)
    store.prune(NOW + HOUR_MS + 1)
    assert len(store) == 1


def test_client_ip_prefers_forwarded_for():
    headers = {"X-Forwarded-For": "9.9.9.9, 10.0.0.1", "X-Real-IP": "8.8.8.8"}
    assert get_client_ip(headers) == "9.9.9.9"
    assert get_client_ip({"x-real-ip": "8.8.8.8"}) == "8.8.8.8"
    assert get_client_ip({}) == "unknown"
