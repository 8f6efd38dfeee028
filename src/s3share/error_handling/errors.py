"""
Error taxonomy for the share service.

Every error carries the HTTP status it maps to and a short, client-safe
message. Backend causes are chained with ``raise ... from exc`` and only
ever logged, never rendered to clients.
"""


class ShareError(Exception):
    """Base class for all share service errors."""

    status_code: int = 500
    error: str = "internal_error"
    message: str = "internal error"
    # When set, the detail text is safe to show to clients.
    expose_detail: bool = False

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


# ---------- client errors ---------- #
class InvalidPathError(ShareError):
    status_code = 400
    error = "invalid_path"
    message = "invalid path"


class InvalidExpiryError(ShareError):
    status_code = 400
    error = "invalid_expiry"
    message = "invalid expiration time"


class InvalidDateError(ShareError):
    status_code = 400
    error = "invalid_date"
    message = "invalid date format"


class InvalidRequestError(ShareError):
    status_code = 400
    error = "invalid_request"
    message = "invalid request body"
    expose_detail = True


class UnauthorizedError(ShareError):
    status_code = 401
    error = "unauthorized"
    message = "unauthorized"


class ExpiredError(ShareError):
    status_code = 403
    error = "expired"
    message = "link expired"


class ShareLinkNotFound(ShareError):
    status_code = 404
    error = "not_found"
    message = "not found"


# ---------- adapter errors ---------- #
class StorageError(ShareError):
    """Object store failure other than a missing object."""

    error = "storage_error"


class ObjectNotFoundError(StorageError):
    status_code = 404
    error = "not_found"
    message = "not found"


class CacheError(ShareError):
    """Secret cache failure."""

    error = "cache_error"


class CacheMissError(CacheError):
    """The requested key is absent or expired. Never reaches clients."""

    status_code = 404
    error = "not_found"
    message = "not found"


# ---------- engine wrappers around backend failures ---------- #
class CacheWriteFailed(ShareError):
    error = "cache_write_failed"


class CacheReadFailed(ShareError):
    error = "cache_read_failed"


class ObjectFetchFailed(ShareError):
    error = "object_fetch_failed"
