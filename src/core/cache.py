"""Thread-safe in-memory LRU cache with per-entry TTL.

Combines a key index (EntryStore) with a recency list (RecencyList) and
keeps the two in lock-step under a single lock. Entries expire lazily on
read and, when a cleanup interval is configured, proactively through a
background sweep that shares the same lock.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from core import eviction
from core.errors import ConfigurationError, NotFoundError, ValidationError
from core.models import FOREVER, CacheConfig, CacheEntry, EvictionPolicy
from core.recency import Node, RecencyList
from core.scheduler import CleanupScheduler
from core.store import EntryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_positive(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # NaN fails this comparison too
    return value > 0


class LRUCache(Generic[T]):
    """Capacity-bounded LRU cache with TTL expiry.

    Purpose:
      - put(key, value, max_age=None) / get(key) / invalidate(key)
      - invalidate_all(), has_key(key), keys(), size(), capacity

    Key behavior:
      - A put on a full cache first evicts floor(capacity * eviction_factor)
        least recently used entries (at least one).
      - get moves the entry to the most recently used position, so it takes
        the same exclusive lock as writes.
      - Expired entries are dropped on read; with cleanup_interval set, a
        background sweep also drops them without any read.
      - Missing keys raise NotFoundError, None values raise ValidationError.
        Invalid settings raise ConfigurationError from the constructor.
      - With cleanup_interval set, the sweep thread keeps the cache alive;
        call close() or use it in a `with` block when done.
    """

    def __init__(
        self,
        *,
        capacity: int = 100,
        eviction_factor: float = 0.25,
        eviction_policy: EvictionPolicy = "LRU",
        default_max_age: Optional[float] = FOREVER,
        cleanup_interval: Optional[float] = None,
        sweep_first_only: bool = False,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigurationError(f"capacity must be a positive integer, got {capacity!r}")
        if not _is_positive(eviction_factor) or eviction_factor > 1.0:
            raise ConfigurationError(f"eviction_factor must be in (0.0, 1.0], got {eviction_factor!r}")
        if eviction_policy != "LRU":
            raise ConfigurationError(f"Unsupported eviction policy: {eviction_policy!r}")
        if default_max_age is not FOREVER and not _is_positive(default_max_age):
            raise ConfigurationError(f"default_max_age must be positive or FOREVER, got {default_max_age!r}")
        if cleanup_interval is not None and not _is_positive(cleanup_interval):
            raise ConfigurationError(f"cleanup_interval must be positive, got {cleanup_interval!r}")

        self._capacity = capacity
        self._eviction_factor = float(eviction_factor)
        self._default_max_age = None if default_max_age is FOREVER else float(default_max_age)
        self._sweep_first_only = bool(sweep_first_only)
        self._clock = clock

        self._store: EntryStore[T] = EntryStore()
        self._recency: RecencyList[T] = RecencyList()

        # Guards the store, the list, the counters and the sweep flag
        self._lock = threading.Lock()
        self._sweeping = False

        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

        self._scheduler: Optional[CleanupScheduler] = None
        if cleanup_interval is not None:
            scheduler = CleanupScheduler(interval=cleanup_interval, callback=self.sweep_expired)
            try:
                scheduler.start()
            except RuntimeError as e:
                raise ConfigurationError(f"Failed to start cleanup task: {e}") from e
            self._scheduler = scheduler

    @classmethod
    def from_config(cls, config: CacheConfig, *, clock: Optional[Callable[[], float]] = None) -> "LRUCache[Any]":
        return cls(
            capacity=config.capacity,
            eviction_factor=config.eviction_factor,
            eviction_policy=config.eviction_policy,
            default_max_age=config.default_max_age,
            cleanup_interval=config.cleanup_interval,
            sweep_first_only=config.sweep_first_only,
            clock=clock,
        )

    def __enter__(self) -> "LRUCache[T]":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        return self.has_key(key)  # type: ignore[arg-type]

    @property
    def capacity(self) -> int:
        return self._capacity

    def _now(self) -> float:
        return self._clock() if self._clock is not None else time.monotonic()

    def _expire_at(self, now: float, max_age: Optional[float]) -> Optional[float]:
        if _is_positive(max_age):
            return now + float(max_age)  # type: ignore[arg-type]
        if self._default_max_age is not None:
            return now + self._default_max_age
        return FOREVER

    def _unlink(self, node: Node[T]) -> None:
        self._recency.remove(node)
        self._store.delete(node.key)

    def put(self, key: str, value: T, max_age: Optional[float] = None) -> None:
        """Insert or replace key.

        max_age (seconds) overrides the default lifetime only when positive;
        otherwise the default applies, which may be FOREVER.
        """
        if value is None:
            raise ValidationError(f"Cannot cache None for key {key!r}")

        now = self._now()
        entry = CacheEntry(key=key, value=value, expire_at=self._expire_at(now, max_age))

        with self._lock:
            old = self._store.get(key)
            if old is not None:
                self._unlink(old)
            elif len(self._store) >= self._capacity:
                count = eviction.eviction_count(self._capacity, self._eviction_factor)
                self._evictions += len(eviction.evict_lru(self._store, self._recency, count))

            node = Node(entry)
            self._recency.add_first(node)
            self._store.set(key, node)

    def get(self, key: str) -> T:
        now = self._now()
        with self._lock:
            node = self._store.get(key)
            if node is None:
                self._misses += 1
                raise NotFoundError(f"Key not found: {key!r}")

            if node.entry.is_expired(now):
                self._unlink(node)
                self._misses += 1
                self._expirations += 1
                logger.debug("Dropped expired key on read: %r", key)
                raise NotFoundError(f"Key not found: {key!r}")

            self._recency.move_to_front(node)
            self._hits += 1
            return node.entry.value

    def invalidate(self, key: str) -> None:
        with self._lock:
            node = self._store.get(key)
            if node is None:
                raise NotFoundError(f"Key not found: {key!r}")
            self._unlink(node)

    def invalidate_all(self) -> None:
        with self._lock:
            self._recency.clear()
            self._store.clear()

    def has_key(self, key: str) -> bool:
        # May report a key that a following get() finds expired
        with self._lock:
            return key in self._store

    def keys(self) -> List[str]:
        # Most recently used first
        with self._lock:
            return [node.key for node in self._recency]

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._store),
                "capacity": self._capacity,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "expirations": self._expirations,
            }

    def sweep_expired(self) -> int:
        """Run one expiry sweep; return how many entries it removed.

        Returns 0 without scanning when another sweep is already running.
        """
        with self._lock:
            if self._sweeping:
                logger.debug("Expiry sweep already in progress; skipping")
                return 0
            self._sweeping = True

        try:
            removed = eviction.sweep_expired(
                self._store,
                self._recency,
                lock=self._lock,
                now=self._now(),
                first_only=self._sweep_first_only,
            )
            with self._lock:
                self._expirations += len(removed)
            return len(removed)
        finally:
            with self._lock:
                self._sweeping = False

    def close(self) -> None:
        """Stop background sweeping. Reads still expire entries lazily."""
        scheduler = self._scheduler
        if scheduler is not None:
            self._scheduler = None
            scheduler.stop()
