from fastapi import Request

from s3share.services.share_service import ShareService


def get_share_service(request: Request) -> ShareService:
    return request.app.state.share_service
