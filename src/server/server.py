"""Server bootstrap for the LRU cache MCP service.

Creates the FastMCP instance, builds the shared cache from environment
configuration, registers the cache tools and starts the MCP server
(stdio transport).
"""

import logging
import sys

from mcp.server.fastmcp import FastMCP

from config import CACHE_LOG_LEVEL, CACHE_SERVER_NAME, load_cache_config
from core.cache import LRUCache

from tools.cache_tools import register as register_cache_tools

mcp = FastMCP(CACHE_SERVER_NAME)

cache = LRUCache.from_config(load_cache_config())


def register_all() -> None:
    register_cache_tools(mcp, cache=cache)


register_all()


def main() -> None:
    # stdout carries the stdio transport
    logging.basicConfig(level=CACHE_LOG_LEVEL, stream=sys.stderr)
    try:
        mcp.run(transport="stdio")
    finally:
        cache.close()


if __name__ == "__main__":
    main()
