#!/usr/bin/env python
"""
Unit tests for Redis cache module

Tests cover:
- Key prefixes
- RedisCache JSON get/set/delete with TTL
- Error handling for unreadable values
- Singleton instance management
"""

import pytest

from formspace.db.redis_cache import RedisCache, RedisKeyPrefix, get_redis_cache, set_redis_cache


class TestRedisKeyPrefix:
    def test_user_key(self):
        assert RedisKeyPrefix.user_key("user_1") == "formspace:user:user_1"


class TestRedisCache:
    """Test RedisCache against fakeredis."""

    @pytest.fixture
    def cache(self, fake_redis_client) -> RedisCache:
        return RedisCache(client=fake_redis_client)

    def test_ping(self, cache: RedisCache):
        assert cache.ping() is True

    def test_set_get_delete(self, cache: RedisCache):
        key = "test:json_key"
        value = {"name": "test", "count": 42}

        assert cache.set(key, value) is True
        assert cache.get(key) == value
        assert cache.delete(key) is True
        assert cache.get(key) is None
        assert cache.delete(key) is False

    def test_set_with_ttl(self, cache: RedisCache):
        cache.set("test:ttl_key", {"a": 1}, expire_seconds=60)
        assert 0 < cache.ttl("test:ttl_key") <= 60
        assert cache.ttl("test:missing") == -2

    def test_unreadable_value_is_a_miss(self, cache: RedisCache, fake_redis_client):
        fake_redis_client.set("test:broken", "{not json")
        assert cache.get("test:broken") is None


class TestSingleton:
    def test_set_redis_cache_replaces_instance(self, fake_redis_client):
        custom = RedisCache(client=fake_redis_client)
        set_redis_cache(custom)
        assert get_redis_cache() is custom
