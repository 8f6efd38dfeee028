"""Command-line share minting: ``s3share-share images/photo.jpg --hours 24``."""

import argparse
import sys
from datetime import timedelta
from typing import Optional, Sequence

from s3share.cache import get_cache
from s3share.configs.config import get_config
from s3share.error_handling.errors import ShareError
from s3share.main import configure_logging
from s3share.services.share_links import generate_secret
from s3share.services.share_service import ShareRequest, ShareService
from s3share.storage import get_store


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an S3 share link")
    parser.add_argument("s3_path", help="Object key inside the bucket, e.g. images/photo.jpg")
    parser.add_argument(
        "--hours", type=int, default=24, help="Link lifetime in hours (default: 24)",
    )
    parser.add_argument(
        "--secret", default="", help="Use this secret instead of a random one",
    )
    return parser


def build_service() -> ShareService:
    config = get_config()
    configure_logging(config.s3share_log_level)
    return ShareService(
        store=get_store(config),
        cache=get_cache(config),
        base_url=config.base_url,
        max_age_days=config.max_age_days,
    )


def main(argv: Optional[Sequence[str]] = None, service: Optional[ShareService] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.hours <= 0:
        print("Error: --hours must be positive", file=sys.stderr)
        return 1

    if service is None:
        service = build_service()

    try:
        result = service.create_share(
            ShareRequest(
                object_path=args.s3_path,
                secret=args.secret or generate_secret(),
                expires_at=service.now() + timedelta(hours=args.hours),
            )
        )
    except ShareError as e:
        print(f"Error: {e.detail}", file=sys.stderr)
        return 1

    print(f"Share URL:  {result.url}")
    print(f"Expires at: {result.expires_at.isoformat()}")
    print(f"Max age:    {result.max_age_seconds} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())
