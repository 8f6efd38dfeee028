"""
Share link format.

A share link looks like ``{base}/{YY}/{MM}/{DD}/{secret}/{object_path}``.
The date is the link's expiry (midnight UTC), the secret is the bearer token
stored in the cache under ``image-auth:{object_path}``.
"""

import re
import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from s3share.error_handling.errors import (
    InvalidDateError,
    InvalidRequestError,
    ShareLinkNotFound,
)

CACHE_KEY_PREFIX = "image-auth:"
DATE_FORMAT = "%y/%m/%d"
MIN_SEGMENTS = 5

_TWO_DIGITS = re.compile(r"^\d{2}$")
_URL_SAFE_SECRET = re.compile(r"^[A-Za-z0-9._~-]+$")


@dataclass(frozen=True)
class ParsedShareLink:
    expires_at: datetime
    secret: str
    object_path: str


def cache_key(object_path: str) -> str:
    return f"{CACHE_KEY_PREFIX}{object_path}"


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def generate_secret(nbytes: int = 16) -> str:
    """Mint a URL-safe random secret for server-side share creation."""
    return secrets.token_urlsafe(nbytes)


def validate_secret(secret: str) -> str:
    if not secret:
        raise InvalidRequestError("secret is required")
    if not _URL_SAFE_SECRET.match(secret):
        raise InvalidRequestError("secret must only contain URL-safe characters")
    return secret


def build_share_url(base_url: str, object_path: str, secret: str, expires_at: datetime) -> str:
    date_part = as_utc(expires_at).strftime(DATE_FORMAT)
    return f"{base_url.rstrip('/')}/{date_part}/{secret}/{quote(object_path, safe='/')}"


def parse_share_path(path: str) -> ParsedShareLink:
    """
    Split a request path into its expiry date, secret and object path.

    Raises:
        ShareLinkNotFound: If the path has fewer than five segments
        InvalidDateError: If the first three segments are not a YY/MM/DD date
    """
    parts = path.strip("/").split("/")
    if len(parts) < MIN_SEGMENTS:
        raise ShareLinkNotFound(f"path {path!r} is not a share link")

    date_parts = parts[0:3]
    if not all(_TWO_DIGITS.match(part) for part in date_parts):
        raise InvalidDateError(f"invalid date segments: {'/'.join(date_parts)}")
    try:
        expires_at = datetime.strptime("/".join(date_parts), DATE_FORMAT)
    except ValueError as e:
        raise InvalidDateError(f"invalid date segments: {'/'.join(date_parts)}") from e

    return ParsedShareLink(
        expires_at=expires_at.replace(tzinfo=timezone.utc),
        secret=parts[3],
        object_path="/".join(parts[4:]),
    )
