"""In-memory TTL cache for normalized video records."""

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from tubecache.domain.video.model.record import NormalizedRecord
from tubecache.domain.video.model.value import CacheStats
from tubecache.domain.video.port.record_cache import RecordCache

logger = logging.getLogger(__name__)

DEFAULT_TTL = 3600.0

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """One stored value. Entries are replaced whole, never mutated."""

    key: str
    value: NormalizedRecord
    stored_at: float
    ttl: float

    @property
    def expires_at(self) -> float:
        return self.stored_at + self.ttl

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheStore(RecordCache):
    """Key -> value map with per-entry TTL.

    Expiry is enforced twice: ``get`` drops an expired entry lazily, and
    ``sweep`` (run periodically by CacheSweeper) removes every expired entry
    so keys that are never requested again do not accumulate. There is no
    capacity bound.

    All operations hold a lock, so interleaved readers, writers and the sweep
    always see whole entries. ``sweep`` decides and deletes per entry under the
    same lock, so a ``set`` racing the sweep is never erased by it.
    """

    def __init__(self, default_ttl: float = DEFAULT_TTL, clock: Clock = time.monotonic) -> None:
        if default_ttl <= 0:
            raise ValueError(f"default_ttl must be positive, got {default_ttl}")
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._sets = 0
        self._expired = 0

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    def get(self, key: str) -> NormalizedRecord | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.is_expired(self._clock()):
                del self._entries[key]
                self._expired += 1
                self._misses += 1
                return None
            self._hits += 1
            return entry.value

    def get_entry(self, key: str) -> CacheEntry | None:
        """Return the live entry for ``key`` without touching hit/miss counters."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.is_expired(self._clock()):
                return None
            return entry

    def set(self, key: str, value: NormalizedRecord, ttl: float | None = None) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        with self._lock:
            self._entries[key] = CacheEntry(key=key, value=value, stored_at=self._clock(), ttl=ttl)
            self._sets += 1

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed.
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            self._expired += len(expired)
        if expired:
            logger.debug("Swept %d expired cache entries", len(expired))
        return len(expired)

    def keys(self) -> list[str]:
        """Keys of live (unexpired) entries."""
        with self._lock:
            now = self._clock()
            return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def stats(self) -> CacheStats:
        with self._lock:
            now = self._clock()
            return CacheStats(
                keys=sum(1 for entry in self._entries.values() if not entry.is_expired(now)),
                hits=self._hits,
                misses=self._misses,
                sets=self._sets,
                expired=self._expired,
                default_ttl=self._default_ttl,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_entry(key) is not None
