"""Eviction procedures for the cache structures.

Stateless helpers that act on an EntryStore / RecencyList pair on behalf
of the cache facade:
- evict_lru drops a batch of least recently used entries when full.
- sweep_expired scans the current keys and drops entries past their TTL.

Callers must hold the cache lock for every call except sweep_expired,
which takes the lock itself one key at a time.
"""

from __future__ import annotations

import logging
import math
from typing import ContextManager, List, TypeVar

from core.recency import RecencyList
from core.store import EntryStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def eviction_count(capacity: int, eviction_factor: float) -> int:
    # At least one, or a put at capacity would overflow it
    return max(1, math.floor(capacity * eviction_factor))


def evict_lru(store: EntryStore[T], recency: RecencyList[T], count: int) -> List[str]:
    evicted: List[str] = []
    for _ in range(count):
        node = recency.remove_last()
        if node is None:
            break
        store.delete(node.key)
        evicted.append(node.key)

    if evicted:
        logger.debug("Evicted %d least recently used entries: %s", len(evicted), evicted)
    return evicted


def remove_if_expired(store: EntryStore[T], recency: RecencyList[T], key: str, now: float) -> bool:
    node = store.get(key)
    if node is None or not node.entry.is_expired(now):
        return False

    recency.remove(node)
    store.delete(key)
    return True


def sweep_expired(
    store: EntryStore[T],
    recency: RecencyList[T],
    *,
    lock: ContextManager[object],
    now: float,
    first_only: bool = False,
) -> List[str]:
    """Remove expired entries from a snapshot of the current keys.

    The lock is taken per key so foreground calls can interleave with a
    long sweep. Keys removed or replaced after the snapshot are re-checked
    under the lock and skipped when no longer expired or already gone.

    With first_only=True the sweep returns after the first removal and
    leaves the rest to the next scheduled run.
    """
    with lock:
        keys = store.keys()

    removed: List[str] = []
    for key in keys:
        with lock:
            if not remove_if_expired(store, recency, key, now):
                continue
        removed.append(key)
        if first_only:
            break

    if removed:
        logger.debug("Expiry sweep removed %d entries: %s", len(removed), removed)
    return removed
