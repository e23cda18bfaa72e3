"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
the cache defaults used by the server (capacity, eviction factor, default
max age, cleanup interval) plus server-level settings.
"""

from __future__ import annotations

import os
from typing import Optional

from core.models import FOREVER, CacheConfig


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _env_log_level(name: str, default: str) -> str:
    raw = os.environ.get(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    return level if level in _LOG_LEVELS else default


def _env_optional_float(name: str, default: Optional[float] = None) -> Optional[float]:
    # Unset, empty or non-positive means "not set"
    value = _env_float(name, 0.0)
    if value <= 0:
        return default
    return value


# Server
CACHE_SERVER_NAME = os.environ.get("CACHE_SERVER_NAME", "lru-cache-mcp").strip()
CACHE_LOG_LEVEL = _env_log_level("CACHE_LOG_LEVEL", "WARNING")

# Cache sizing
CACHE_CAPACITY = _env_int("CACHE_CAPACITY", 100)
CACHE_EVICTION_FACTOR = _env_float("CACHE_EVICTION_FACTOR", 0.25)

# Lifetimes (seconds)
CACHE_DEFAULT_MAX_AGE = _env_optional_float("CACHE_DEFAULT_MAX_AGE", FOREVER)
CACHE_CLEANUP_INTERVAL = _env_optional_float("CACHE_CLEANUP_INTERVAL")
CACHE_SWEEP_FIRST_ONLY = _env_bool("CACHE_SWEEP_FIRST_ONLY", False)


def load_cache_config() -> CacheConfig:
    # Values are validated by LRUCache, not here
    return CacheConfig(
        capacity=CACHE_CAPACITY,
        eviction_factor=CACHE_EVICTION_FACTOR,
        default_max_age=CACHE_DEFAULT_MAX_AGE,
        cleanup_interval=CACHE_CLEANUP_INTERVAL,
        sweep_first_only=CACHE_SWEEP_FIRST_ONLY,
    )
