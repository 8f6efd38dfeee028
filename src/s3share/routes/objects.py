"""
Share link retrieval: ``GET /{yy}/{mm}/{dd}/{secret}/{path...}``.

This router holds a catch-all route and must be included after every
other router.
"""

import logging
from typing import Iterator

from fastapi import Depends
from fastapi.responses import StreamingResponse
from fastapi.routing import APIRouter
from starlette.background import BackgroundTask

from s3share.deps import get_share_service
from s3share.error_handling.errors import (
    ExpiredError,
    ShareLinkNotFound,
    UnauthorizedError,
)
from s3share.services.share_links import parse_share_path
from s3share.services.share_service import ShareService
from s3share.storage.base import ObjectReader

logger = logging.getLogger("s3share.objects")
router = APIRouter(
    tags=["objects"],
    responses={404: {"description": "Not found"}},
)

RESERVED_PREFIX = "api"
RESERVED_PATHS = {"health", "ready"}
CACHE_CONTROL = "public, max-age=3600"


def _is_reserved(path: str) -> bool:
    path = path.strip("/")
    return path.split("/", 1)[0] == RESERVED_PREFIX or path in RESERVED_PATHS


def _stream(reader: ObjectReader, object_path: str) -> Iterator[bytes]:
    try:
        yield from reader.iter_chunks()
    except Exception as e:
        logger.error(f"Failed to stream object {object_path}: {e}")
        raise
    finally:
        reader.close()


@router.get("/{full_path:path}")
def get_shared_object(
    full_path: str,
    service: ShareService = Depends(get_share_service),
):
    """
    Validate a share link and stream the object it points to.

    The expiry is read from the date embedded in the URL, not from the
    secret's TTL in the cache.
    """
    if _is_reserved(full_path):
        raise ShareLinkNotFound(f"no route for {full_path}")

    link = parse_share_path(full_path)

    try:
        service.check_expiry(link.expires_at)
    except ExpiredError:
        logger.info(
            f"Expired link accessed for {link.object_path}, "
            f"expired at {link.expires_at.date().isoformat()}"
        )
        raise

    try:
        service.validate_share(link.object_path, link.secret)
    except UnauthorizedError:
        logger.warning(f"Unauthorized access attempt for {link.object_path}")
        raise

    reader = service.get_object(link.object_path)
    try:
        return StreamingResponse(
            _stream(reader, link.object_path),
            media_type=reader.content_type,
            headers={
                "Content-Length": str(reader.size),
                "Cache-Control": CACHE_CONTROL,
            },
            background=BackgroundTask(reader.close),
        )
    except Exception:
        reader.close()
        raise
