"""GitHub API cache and call accounting.

One ApiCache is created per run by the orchestrator and handed to the
GitHub client; nothing here is module-level state.
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import structlog

from maintainers_sync.cache.backends import CacheBackend, FileCacheBackend, RedisCacheBackend
from maintainers_sync.config import Settings

logger = structlog.get_logger()


@dataclass
class ApiCallStats:
    """Counts of GitHub API calls and cache hits for one run."""

    calls: Counter = field(default_factory=Counter)
    cache_hits: Counter = field(default_factory=Counter)
    rate_limit_remaining: int | None = None

    def record_call(self, kind: str) -> None:
        self.calls[kind] += 1

    def record_hit(self, kind: str) -> None:
        self.cache_hits[kind] += 1

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_calls": self.total_calls,
            "calls": dict(self.calls),
            "cache_hits": dict(self.cache_hits),
            "rate_limit_remaining": self.rate_limit_remaining,
        }

    def log(self) -> None:
        """Log the API usage summary."""
        logger.info("GitHub API usage", **self.to_dict())


class ApiCache:
    """Namespaced cache in front of GitHub API responses.

    Usage:
        async with ApiCache(FileCacheBackend(path), ttl_seconds=3600) as cache:
            await cache.set("profiles", "alice", {...})
    """

    def __init__(self, backend: CacheBackend, ttl_seconds: int | None = None):
        self.backend = backend
        self.ttl_seconds = ttl_seconds
        self.stats = ApiCallStats()

    async def __aenter__(self) -> "ApiCache":
        await self.backend.load()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await self.backend.save()
        finally:
            await self.backend.close()

    def _key(self, namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    async def get(self, namespace: str, key: str) -> Any | None:
        """Get a cached value and count the hit."""
        value = await self.backend.get(self._key(namespace, key))
        if value is not None:
            self.stats.record_hit(namespace)
            logger.debug("Cache hit", namespace=namespace, key=key)
        return value

    async def set(self, namespace: str, key: str, value: Any) -> None:
        """Cache a value with the configured TTL."""
        await self.backend.set(self._key(namespace, key), value, ttl=self.ttl_seconds)


def create_cache(settings: Settings) -> ApiCache:
    """Build the API cache for the configured backend."""
    if settings.cache_backend == "redis":
        backend: CacheBackend = RedisCacheBackend(settings.redis_url)
    else:
        backend = FileCacheBackend(settings.cache_file_path)
    return ApiCache(backend, ttl_seconds=settings.cache_ttl_seconds)
