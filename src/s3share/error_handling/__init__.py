"""Error taxonomy and HTTP error rendering."""

from .errors import (
    CacheError,
    CacheMissError,
    CacheReadFailed,
    CacheWriteFailed,
    ExpiredError,
    InvalidDateError,
    InvalidExpiryError,
    InvalidPathError,
    InvalidRequestError,
    ObjectFetchFailed,
    ObjectNotFoundError,
    ShareError,
    ShareLinkNotFound,
    StorageError,
    UnauthorizedError,
)

__all__ = [
    "CacheError",
    "CacheMissError",
    "CacheReadFailed",
    "CacheWriteFailed",
    "ExpiredError",
    "InvalidDateError",
    "InvalidExpiryError",
    "InvalidPathError",
    "InvalidRequestError",
    "ObjectFetchFailed",
    "ObjectNotFoundError",
    "ShareError",
    "ShareLinkNotFound",
    "StorageError",
    "UnauthorizedError",
]
