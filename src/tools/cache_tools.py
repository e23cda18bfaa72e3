"""MCP tools that expose a single in-process LRUCache.

Registers cache_put / cache_get / cache_has_key / cache_invalidate /
cache_invalidate_all / cache_keys / cache_stats against the cache instance
injected by the server. The cache lives in the server process only.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from core.cache import LRUCache
from core.errors import ValidationError


def _require_key(key: str) -> str:
    if not key or not key.strip():
        raise ValidationError("Missing cache key")
    return key


def register(mcp: FastMCP, *, cache: LRUCache[Any]) -> None:
    @mcp.tool(name="cache_put")
    async def cache_put(key: str = "", value: Any = None, max_age: Optional[float] = None) -> str:
        """Store a JSON value under key.

        Parameters:
          - key: cache key (required, non-blank).
          - value: any JSON value except null.
          - max_age: lifetime in seconds. Omitted or non-positive uses the
            server's default lifetime (which may be "never expires").

        Raises:
          ValidationError for a blank key or a null value.
        """
        cache.put(_require_key(key), value, max_age=max_age)
        return "OK"

    @mcp.tool(name="cache_get")
    async def cache_get(key: str = "") -> Any:
        """Return the value stored under key.

        Raises NotFoundError when the key is absent or has expired.
        """
        return cache.get(_require_key(key))

    @mcp.tool(name="cache_has_key")
    async def cache_has_key(key: str = "") -> bool:
        """Check whether key is currently stored (it may still expire before a get)."""
        return cache.has_key(_require_key(key))

    @mcp.tool(name="cache_invalidate")
    async def cache_invalidate(key: str = "") -> str:
        """Remove key. Raises NotFoundError when the key is absent."""
        cache.invalidate(_require_key(key))
        return "OK"

    @mcp.tool(name="cache_invalidate_all")
    async def cache_invalidate_all() -> str:
        """Remove every entry. Safe to call on an empty cache."""
        cache.invalidate_all()
        return "OK"

    @mcp.tool(name="cache_keys")
    async def cache_keys() -> List[str]:
        """List stored keys, most recently used first."""
        return cache.keys()

    @mcp.tool(name="cache_stats")
    async def cache_stats() -> Dict[str, int]:
        """Return size, capacity and hit/miss/eviction/expiration counters."""
        return cache.stats()
