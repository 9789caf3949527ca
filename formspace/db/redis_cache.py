"""Redis-backed JSON cache shared by all backend replicas.

Used for read-through caching of user profiles. Keys are namespaced with
the ``formspace:`` prefix (see ``RedisKeyPrefix``).

Usage:
    from formspace.db.redis_cache import RedisKeyPrefix, get_redis_cache

    cache = get_redis_cache()
    key = RedisKeyPrefix.user_key("user_abc123")
    cache.set(key, {"email": "a@example.com"}, expire_seconds=900)
    data = cache.get(key)
    cache.delete(key)
"""

import json
from enum import Enum
from typing import Any

import redis

from formspace.db.redis_factory import create_redis_client
from formspace.utils import get_logger

logger = get_logger(__name__)


class RedisKeyPrefix(str, Enum):
    """Key prefixes. Format: formspace:{entity_type}:{entity_id}"""

    USER = "formspace:user"

    @classmethod
    def user_key(cls, user_id: str) -> str:
        return f"{cls.USER.value}:{user_id}"


class RedisCache:
    """JSON-serializing wrapper around a Redis client.

    Errors are logged and reported as cache misses so that callers can fall
    back to the database.
    """

    def __init__(self, client: redis.Redis | None = None):
        # Tests pass a fakeredis client; otherwise one is built from settings on first use
        self._client: redis.Redis | None = client

    @property
    def client(self) -> redis.Redis:
        """Lazily created Redis client."""
        if self._client is None:
            self._client = create_redis_client()
        return self._client

    def get(self, key: str) -> Any | None:
        """Decoded JSON value for ``key``; None on miss, expiry or any error."""
        try:
            raw = self.client.get(key)
        except redis.RedisError as e:
            logger.error(f"Redis get failed for {key}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.error(f"Discarding undecodable cache value at {key}")
            return None

    def set(self, key: str, value: Any, expire_seconds: int | None = None) -> bool:
        """Store ``value`` as JSON, with a TTL when ``expire_seconds`` is set."""
        try:
            payload = json.dumps(value, default=str)
        except (TypeError, ValueError) as e:
            logger.error(f"Cannot serialize cache value for {key}: {e}")
            return False
        try:
            return bool(self.client.set(key, payload, ex=expire_seconds or None))
        except redis.RedisError as e:
            logger.error(f"Redis set failed for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete cached value. Returns True if a key was removed."""
        try:
            return bool(self.client.delete(key))
        except redis.RedisError as e:
            logger.error(f"Redis delete error for key {key}: {e}")
            return False

    def ttl(self, key: str) -> int:
        """Remaining TTL in seconds (-2 if missing, -1 if no expiry)."""
        try:
            return self.client.ttl(key)
        except redis.RedisError as e:
            logger.error(f"Redis ttl error for key {key}: {e}")
            return -2

    def ping(self) -> bool:
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False


_redis_cache: RedisCache | None = None


def get_redis_cache() -> RedisCache:
    """Get the process-wide Redis cache instance."""
    global _redis_cache
    if _redis_cache is None:
        _redis_cache = RedisCache()
    return _redis_cache


def set_redis_cache(cache: RedisCache | None) -> None:
    """Replace the process-wide cache (tests inject a fakeredis-backed one)."""
    global _redis_cache
    _redis_cache = cache
