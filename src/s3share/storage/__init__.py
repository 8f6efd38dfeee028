from .base import ObjectMetadata, ObjectReader, ObjectStore
from .local import LocalStore
from .s3 import S3Store
from s3share.configs.config import Config


def get_store(config: Config) -> ObjectStore:
    backend = config.storage_backend
    if backend == "s3":
        return S3Store(
            bucket=config.s3_bucket,
            region=config.aws_region or None,
            endpoint_url=config.s3_endpoint or None,  # leave empty for AWS
            prefix=config.s3_prefix,
        )
    elif backend == "local":
        return LocalStore(base_path=config.local_path)
    else:
        raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    "LocalStore",
    "ObjectMetadata",
    "ObjectReader",
    "ObjectStore",
    "S3Store",
    "get_store",
]
