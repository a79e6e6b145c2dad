"""
In-memory TTL cache for completed searches.

Entries are keyed by the canonical search URL and hold an immutable
snapshot of the records. Expired entries are dropped lazily when read and
opportunistically by a periodic sweep on write.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import structlog

from linkedin_jobs.models.job import JobRecord

logger = structlog.get_logger()


DEFAULT_TTL_SECONDS = 60 * 60


@dataclass(frozen=True)
class CacheEntry:
    """Cached records and when they were stored."""

    records: tuple[JobRecord, ...]
    stored_at: float
    # False when the run stopped at its limit before running out of listings
    complete: bool = True

    def is_expired(self, now: float, ttl: float) -> bool:
        return now - self.stored_at > ttl

    def covers(self, limit: int) -> bool:
        """Whether these records can answer a query with this limit, 0 = all."""
        return self.complete or (limit > 0 and len(self.records) >= limit)


class JobCache:
    """
    TTL cache of search results.

    One instance is meant to be shared by every search in the process.
    All operations are in-memory and guarded by a lock; writes to the same
    key simply replace the previous entry.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        sweep_interval_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl_seconds
        self.sweep_interval = sweep_interval_seconds if sweep_interval_seconds is not None else ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """
        Return the cache entry for key, or None on a miss.
        An expired entry is removed and reported as a miss.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._clock(), self.ttl):
                del self._entries[key]
                logger.debug("Cache entry expired", key=key)
                return None
            logger.debug("Cache hit", key=key, count=len(entry.records))
            return entry

    def get(self, key: str) -> Optional[tuple[JobRecord, ...]]:
        """Return cached records for key, or None on a miss."""
        entry = self.get_entry(key)
        return entry.records if entry is not None else None

    def set(self, key: str, records: Iterable[JobRecord], complete: bool = True) -> None:
        """
        Store records under key, replacing any previous entry.
        Pass complete=False when the records were cut short by a limit.
        """
        now = self._clock()
        entry = CacheEntry(records=tuple(records), stored_at=now, complete=complete)
        with self._lock:
            self._entries[key] = entry
        logger.debug("Cached results", key=key, count=len(entry.records), complete=complete)

        if now - self._last_sweep >= self.sweep_interval:
            self.sweep()

    def sweep(self) -> int:
        """Remove every expired entry. Returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now, self.ttl)]
            for key in expired:
                del self._entries[key]
            self._last_sweep = now
        if expired:
            logger.debug("Swept expired cache entries", removed=len(expired))
        return len(expired)

    def clear(self) -> int:
        """Evict every entry, expired or not. Returns how many were removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info("Cache cleared", removed=removed)
        return removed

    @property
    def size(self) -> int:
        """Number of stored entries, including ones not yet swept."""
        with self._lock:
            return len(self._entries)

    def __len__(self) -> int:
        return self.size

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class NullCache(JobCache):
    """Cache that never stores anything."""

    def __init__(self):
        super().__init__(ttl_seconds=0)

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        return None

    def set(self, key: str, records: Iterable[JobRecord], complete: bool = True) -> None:
        return None
