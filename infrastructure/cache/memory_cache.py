from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from domain.models.currency import CacheEntry, RateSet


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class RateCache:
    """In-memory rate sets keyed by base currency, one entry per base.

    Entries are replaced wholesale, never merged. Degraded entries (served from
    stale data or the offline table) age out after ``degraded_ttl`` so remote
    sources are retried sooner.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=60),
        degraded_ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], datetime] = utc_now,
    ):
        self.ttl = ttl
        self.degraded_ttl = degraded_ttl
        self.clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, base: str) -> CacheEntry | None:
        return self._entries.get(base)

    def is_fresh(self, base: str) -> bool:
        entry = self._entries.get(base)
        if entry is None:
            return False
        window = self.degraded_ttl if entry.degraded else self.ttl
        return self.clock() - entry.fetched_at < window

    def is_stale(self, observed_at: datetime) -> bool:
        return self.clock() - observed_at >= self.ttl

    def put(self, base: str, rates: RateSet, degraded: bool = False) -> CacheEntry:
        entry = CacheEntry(rates=rates, fetched_at=self.clock(), degraded=degraded)
        self._entries[base] = entry
        return entry

    def invalidate(self, base: str) -> None:
        self._entries.pop(base, None)

    def clear(self) -> None:
        self._entries.clear()
