"""Single-entry freshness cache for the aggregate result.

Note: the check-then-fetch-then-store sequence in the aggregator is not
atomic. Concurrent misses may each hit Cloudflare and overwrite the entry;
the last write wins. Each uvicorn worker holds its own cache.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass

from outage_relay.schemas.outage import AggregateResult


@dataclass(frozen=True)
class CacheEntry:
    result: AggregateResult
    stored_at: float  # clock() seconds


class AggregateCache:
    def __init__(self, ttl_seconds: float = 600.0, clock: Callable[[], float] = time.time):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entry: CacheEntry | None = None

    @property
    def entry(self) -> CacheEntry | None:
        return self._entry

    @property
    def last_fetch(self) -> str | None:
        """`generated_at` of the last successful fetch, if any."""
        return self._entry.result.generated_at if self._entry else None

    def get_fresh(self, now: float | None = None) -> AggregateResult | None:
        """Return the cached result while younger than the TTL."""
        entry = self._entry
        if entry is None:
            return None
        now = self.clock() if now is None else now
        if now - entry.stored_at < self.ttl_seconds:
            return entry.result
        return None

    def store(self, result: AggregateResult, now: float | None = None) -> None:
        self._entry = CacheEntry(result=result, stored_at=self.clock() if now is None else now)
