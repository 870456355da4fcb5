from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Protocol, Tuple
import time


@dataclass(frozen=True)
class RateLimitRule:
    window_ms: int
    max_requests: int


HOUR_MS = 60 * 60 * 1000

RATE_LIMITS: Dict[str, RateLimitRule] = {
    "parse-syllabus": RateLimitRule(window_ms=HOUR_MS, max_requests=20),
    "generate-guide": RateLimitRule(window_ms=HOUR_MS, max_requests=10),
}


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_in_ms: int

    @property
    def retry_after_s(self) -> int:
        return -(-self.reset_in_ms // 1000)  # ceil


class RateLimitStore(Protocol):
    """Counter storage. `get` returns (count, reset_at_ms) or None."""

    def get(self, key: str) -> Optional[Tuple[int, int]]:
        ...

    def increment(self, key: str) -> int:
        ...

    def expire(self, key: str, reset_at_ms: int) -> None:
        ...


class InMemoryRateLimitStore:
    """Single-process store; counters vanish with the process."""

    def __init__(self, max_keys: int = 10_000):
        self._records: Dict[str, Tuple[int, int]] = {}
        self._max_keys = max_keys

    def get(self, key: str) -> Optional[Tuple[int, int]]:
        return self._records.get(key)

    def increment(self, key: str) -> int:
        count, reset_at = self._records.get(key, (0, 0))
        self._records[key] = (count + 1, reset_at)
        return count + 1

    # Start a fresh window for `key` ending at reset_at_ms
    def expire(self, key: str, reset_at_ms: int) -> None:
        if len(self._records) > self._max_keys:
            self.prune(_now_ms())
        self._records[key] = (0, reset_at_ms)

    def prune(self, now_ms: int) -> None:
        for key in [k for k, (_, reset_at) in self._records.items() if reset_at < now_ms]:
            del self._records[key]

    def __len__(self) -> int:
        return len(self._records)


def _now_ms() -> int:
    return int(time.time() * 1000)


def check_rate_limit(
    store: RateLimitStore,
    identifier: str,
    endpoint: str,
    now_ms: Optional[int] = None,
) -> RateLimitResult:

    rule = RATE_LIMITS.get(endpoint)
    if rule is None:
        return RateLimitResult(allowed=True, remaining=999, reset_in_ms=0)

    now_ms = _now_ms() if now_ms is None else now_ms
    key = f"{endpoint}:{identifier}"
    record = store.get(key)

    # New window
    if record is None or record[1] < now_ms:
        store.expire(key, now_ms + rule.window_ms)
        store.increment(key)
        return RateLimitResult(True, rule.max_requests - 1, rule.window_ms)

    count, reset_at = record
    if count >= rule.max_requests:
        return RateLimitResult(False, 0, reset_at - now_ms)

    count = store.increment(key)
    return RateLimitResult(True, rule.max_requests - count, reset_at - now_ms)


# Client identity from proxy headers
def get_client_ip(headers: Mapping[str, str]) -> str:
    lowered = {k.lower(): v for k, v in headers.items()}

    forwarded = lowered.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()

    real_ip = lowered.get("x-real-ip")
    if real_ip:
        return real_ip

    return "unknown"
