from datetime import datetime, timedelta
from typing import Optional

from fastapi import Depends
from fastapi.routing import APIRouter
from pydantic import BaseModel

from s3share.deps import get_share_service
from s3share.error_handling.errors import InvalidRequestError
from s3share.services.share_service import ShareRequest, ShareService

router = APIRouter(
    prefix="/api/shares",
    tags=["shares"],
    responses={404: {"description": "Not found"}},
)

DEFAULT_SHARE_LIFETIME = timedelta(hours=24)


class CreateShareBody(BaseModel):
    s3_path: str = ""
    secret: str = ""
    expires_at: Optional[datetime] = None


class CreateShareResult(BaseModel):
    url: str
    expires_at: datetime
    max_age_seconds: int


# Endpoints are plain ``def`` so the blocking backend calls run in the threadpool.
@router.post("", response_model=CreateShareResult)
def create_share(
    body: CreateShareBody,
    service: ShareService = Depends(get_share_service),
):
    """
    Mint a share link for an object.

    ``expires_at`` defaults to 24 hours from now.
    """
    if not body.s3_path:
        raise InvalidRequestError("s3_path is required")
    if not body.secret:
        raise InvalidRequestError("secret is required")

    expires_at = body.expires_at or service.now() + DEFAULT_SHARE_LIFETIME
    result = service.create_share(
        ShareRequest(object_path=body.s3_path, secret=body.secret, expires_at=expires_at)
    )
    return CreateShareResult(
        url=result.url,
        expires_at=result.expires_at,
        max_age_seconds=result.max_age_seconds,
    )
