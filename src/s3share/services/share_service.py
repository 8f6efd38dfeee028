"""
Share authorization engine.

Mints share links for objects in the blob store, validates presented
secrets against the secret cache, and opens objects for streaming. The
service keeps no state of its own: secrets live in the cache and expire
through its TTL.
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from s3share.cache.base import SecretCache
from s3share.error_handling.errors import (
    CacheError,
    CacheMissError,
    CacheReadFailed,
    CacheWriteFailed,
    ExpiredError,
    InvalidExpiryError,
    ObjectFetchFailed,
    ObjectNotFoundError,
    StorageError,
    UnauthorizedError,
)
from s3share.security.path_validator import validate_object_path
from s3share.services.share_links import (
    as_utc,
    build_share_url,
    cache_key,
    validate_secret,
)
from s3share.storage.base import ObjectReader, ObjectStore

logger = logging.getLogger("s3share.shares")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ShareRequest:
    object_path: str
    secret: str
    expires_at: datetime


@dataclass(frozen=True)
class ShareResponse:
    url: str
    expires_at: datetime
    max_age: timedelta

    @property
    def max_age_seconds(self) -> int:
        return int(self.max_age.total_seconds())


class ShareService:
    def __init__(
        self,
        store: ObjectStore,
        cache: SecretCache,
        base_url: str,
        max_age_days: int = 90,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self.cache = cache
        self.base_url = base_url.rstrip("/")
        self.max_age = timedelta(days=max_age_days)
        self.clock = clock or utc_now

    def now(self) -> datetime:
        return as_utc(self.clock())

    def create_share(self, request: ShareRequest) -> ShareResponse:
        """
        Mint a share link for an existing object.

        The secret is stored under the object's cache key with a TTL equal
        to the remaining lifetime, replacing any previous secret for the
        same path.

        Raises:
            InvalidPathError: If the object path is unsafe
            InvalidRequestError: If the secret is empty or not URL-safe
            ObjectNotFoundError: If the object does not exist
            StorageError: If the object store fails
            InvalidExpiryError: If the expiry is not in the future or exceeds the policy
            CacheWriteFailed: If the secret cannot be stored
        """
        object_path = validate_object_path(request.object_path)
        secret = validate_secret(request.secret)

        try:
            self.store.head_object(object_path)
        except ObjectNotFoundError as e:
            raise ObjectNotFoundError(f"object not found: {object_path}") from e

        expires_at = as_utc(request.expires_at)
        max_age = expires_at - self.now()
        if max_age <= timedelta(0):
            raise InvalidExpiryError("expiration time must be in the future")
        if max_age > self.max_age:
            raise InvalidExpiryError(
                f"expiration time exceeds the maximum of {self.max_age.days} days"
            )

        try:
            self.cache.set(cache_key(object_path), secret, max_age)
        except CacheError as e:
            raise CacheWriteFailed(f"failed to store share in cache: {e}") from e

        url = build_share_url(self.base_url, object_path, secret, expires_at)
        logger.info(f"Created share for {object_path}, expires at {expires_at.isoformat()}")
        return ShareResponse(url=url, expires_at=expires_at, max_age=max_age)

    def validate_share(self, object_path: str, secret: str) -> None:
        """
        Check *secret* against the one stored for *object_path*.

        An unknown path and a wrong secret both raise ``UnauthorizedError``.
        """
        object_path = validate_object_path(object_path)

        try:
            stored = self.cache.get(cache_key(object_path))
        except CacheMissError:
            raise UnauthorizedError("no share exists for this path") from None
        except CacheError as e:
            raise CacheReadFailed(f"failed to validate share: {e}") from e

        if not hmac.compare_digest(stored.encode("utf-8"), secret.encode("utf-8")):
            raise UnauthorizedError("secret mismatch")

    def get_object(self, object_path: str) -> ObjectReader:
        """Open *object_path* for streaming. Performs no authorization."""
        object_path = validate_object_path(object_path)

        try:
            return self.store.get_object(object_path)
        except ObjectNotFoundError:
            raise
        except StorageError as e:
            raise ObjectFetchFailed(f"failed to get object: {e}") from e

    def check_expiry(self, expires_at: datetime) -> None:
        """Raise ``ExpiredError`` once the current time is past *expires_at*."""
        if self.now() > as_utc(expires_at):
            raise ExpiredError(f"link expired at {expires_at.isoformat()}")
