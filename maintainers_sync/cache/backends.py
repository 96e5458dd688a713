"""Storage backends for the GitHub API cache."""

import json
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import redis.asyncio as redis
import structlog

logger = structlog.get_logger()


class CacheBackend(ABC):
    """Key/value store used by the API cache."""

    async def load(self) -> None:
        """Prepare the backend before first use."""

    async def save(self) -> None:
        """Persist pending entries."""

    async def close(self) -> None:
        """Release resources held by the backend."""

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Get a cached value, or None when missing or expired."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store a JSON-serializable value."""
        pass


class FileCacheBackend(CacheBackend):
    """Cache kept in a JSON file between runs.

    The file is read once on load() and rewritten on save(); entries carry
    their own expiry timestamp.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._entries: dict[str, dict[str, Any]] = {}
        self._dirty = False

    async def load(self) -> None:
        """Read cached entries from disk."""
        if not self.path.exists():
            logger.debug("No cache file found, starting empty", path=str(self.path))
            return
        try:
            self._entries = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Ignoring unreadable cache file", path=str(self.path), error=str(e))
            self._entries = {}
        logger.debug("Cache loaded", path=str(self.path), entries=len(self._entries))

    async def save(self) -> None:
        """Write live entries back to disk."""
        if not self._dirty:
            return
        now = time.time()
        live = {
            key: entry
            for key, entry in self._entries.items()
            if entry.get("expires_at") is None or entry["expires_at"] > now
        }
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(live, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)
        self._dirty = False
        logger.debug("Cache saved", path=str(self.path), entries=len(live))

    async def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at = entry.get("expires_at")
        if expires_at is not None and expires_at <= time.time():
            del self._entries[key]
            self._dirty = True
            return None
        return entry.get("value")

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._entries[key] = {
            "value": value,
            "expires_at": time.time() + ttl if ttl else None,
        }
        self._dirty = True


class RedisCacheBackend(CacheBackend):
    """Cache stored in Redis with per-key TTL."""

    def __init__(self, url: str, prefix: str = "maintainers"):
        self.url = url
        self.prefix = prefix
        self._client: redis.Redis | None = None

    async def load(self) -> None:
        """Connect to Redis."""
        self._client = redis.from_url(
            self.url,
            encoding="utf-8",
            decode_responses=True,
        )
        await self.client.ping()
        logger.info("Redis connected")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            logger.info("Redis connection closed")

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        if not self._client:
            raise RuntimeError("Redis client not initialized. Call load() first.")
        return self._client

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def get(self, key: str) -> Any | None:
        data = await self.client.get(self._key(key))
        return json.loads(data) if data else None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        await self.client.set(self._key(key), json.dumps(value), ex=ttl)
