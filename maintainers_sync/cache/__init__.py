"""API cache for GitHub calls."""

from maintainers_sync.cache.api_cache import ApiCache, ApiCallStats, create_cache
from maintainers_sync.cache.backends import CacheBackend, FileCacheBackend, RedisCacheBackend

__all__ = [
    "ApiCache",
    "ApiCallStats",
    "create_cache",
    "CacheBackend",
    "FileCacheBackend",
    "RedisCacheBackend",
]
