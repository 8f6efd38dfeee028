from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class SecretCache(Protocol):
    """
    Key-value contract for share secrets.

    Expiry is enforced by the backing store. ``get`` raises
    ``CacheMissError`` for absent or expired keys; every other failure
    raises ``CacheError``.
    """

    def set(self, key: str, value: str, ttl: timedelta) -> None: ...

    def get(self, key: str) -> str: ...

    def delete(self, key: str) -> None: ...
