from .base import SecretCache
from .memory import InMemorySecretCache
from .redis_cache import RedisSecretCache
from s3share.configs.config import Config


def get_cache(config: Config) -> SecretCache:
    backend = config.cache_backend
    if backend == "redis":
        return RedisSecretCache.from_config(config)
    elif backend == "memory":
        return InMemorySecretCache()
    else:
        raise ValueError(f"Unknown cache backend: {backend}")


__all__ = ["InMemorySecretCache", "RedisSecretCache", "SecretCache", "get_cache"]
