from __future__ import annotations


class CacheError(Exception):
    """Base error for the cache."""


class ConfigurationError(CacheError, ValueError):
    """Raised when the cache is constructed with invalid settings."""


class ValidationError(CacheError):
    """Raised when an operation receives invalid input."""


class NotFoundError(CacheError, KeyError):
    """Raised when a key is absent or has expired."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep plain messages
        return str(self.args[0]) if self.args else ""
