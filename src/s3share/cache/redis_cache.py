"""
Redis-backed secret cache.
"""

import logging
from datetime import timedelta

from redis import Redis
from redis.exceptions import RedisError

from s3share.configs.config import Config
from s3share.error_handling.errors import CacheError, CacheMissError

logger = logging.getLogger("s3share.cache.redis")


class RedisSecretCache:
    def __init__(self, client: Redis):
        self.redis = client

    @classmethod
    def from_config(cls, config: Config) -> "RedisSecretCache":
        kwargs = {}
        if config.redis_tls_enabled:
            # Server certificates are not verified.
            kwargs.update(ssl=True, ssl_cert_reqs="none")
        client = Redis(
            host=config.redis_host,
            port=config.redis_port,
            password=config.redis_password or None,
            db=config.redis_db,
            decode_responses=True,
            **kwargs,
        )
        return cls(client)

    def ping(self) -> None:
        try:
            self.redis.ping()
        except RedisError as e:
            raise CacheError(f"failed to connect to Redis: {e}") from e

    def set(self, key: str, value: str, ttl: timedelta) -> None:
        """Store *value* under *key*, expiring after *ttl* (millisecond precision)."""
        ttl_ms = max(int(ttl.total_seconds() * 1000), 1)
        try:
            self.redis.set(key, value, px=ttl_ms)
        except RedisError as e:
            raise CacheError(f"failed to set key in Redis: {e}") from e

    def get(self, key: str) -> str:
        try:
            value = self.redis.get(key)
        except RedisError as e:
            raise CacheError(f"failed to get key from Redis: {e}") from e
        if value is None:
            raise CacheMissError(f"key {key} not found")
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    def delete(self, key: str) -> None:
        try:
            self.redis.delete(key)
        except RedisError as e:
            raise CacheError(f"failed to delete key from Redis: {e}") from e

    def close(self) -> None:
        try:
            self.redis.close()
        except RedisError as e:
            logger.warning(f"Error closing Redis connection: {e}")
