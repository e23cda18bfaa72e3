"""Configuration model and sentinels shared by the cache components.

CacheConfig groups the construction-time options; FOREVER marks entries
(and default lifetimes) that never expire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, Optional, TypeVar


EvictionPolicy = Literal["LRU"]

# "Never expires". Only ever checked with `is`, never compared to a clock.
FOREVER = None


@dataclass(frozen=True)
class CacheConfig:
    """Construction options for LRUCache.

    Field groups:
    - Size: capacity, eviction_factor, eviction_policy
    - Lifetime: default_max_age (seconds or FOREVER)
    - Background: cleanup_interval (seconds or None), sweep_first_only
    """

    capacity: int = 100
    eviction_factor: float = 0.25
    eviction_policy: EvictionPolicy = "LRU"

    default_max_age: Optional[float] = FOREVER

    cleanup_interval: Optional[float] = None
    sweep_first_only: bool = False


T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[T]):
    # Replaced, never mutated, on a repeated put
    key: str
    value: T
    expire_at: Optional[float]  # time.monotonic() deadline, or FOREVER

    def is_expired(self, now: float) -> bool:
        if self.expire_at is FOREVER:
            return False
        return self.expire_at < now
