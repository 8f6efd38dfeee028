# s3share/storage/local.py
import mimetypes
from datetime import datetime, timezone
from pathlib import Path

from s3share.error_handling.errors import ObjectNotFoundError, StorageError

from .base import DEFAULT_CONTENT_TYPE, ObjectMetadata, ObjectReader


class LocalStore:
    """
    Serves objects from <base_path>/<object_key>
    where *object_key* can include slashes (e.g. images/2025/photo.jpg).

    Meant for development and tests: it answers the same head/get contract
    as the S3 backend so the share service cannot tell them apart.
    """

    def __init__(self, base_path: str = "/var/s3share/objects"):
        self.root = Path(base_path).expanduser().resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    # ---------- helpers ---------- #
    def _full(self, key: str) -> Path:
        full = self.root.joinpath(key).resolve()
        if full != self.root and self.root not in full.parents:
            raise ObjectNotFoundError(f"object {key} is outside the store root")
        return full

    def _content_type(self, path: Path) -> str:
        guessed, _ = mimetypes.guess_type(path.name)
        return guessed or DEFAULT_CONTENT_TYPE

    # ---------- API ---------- #
    def head_object(self, object_key: str) -> ObjectMetadata:
        path = self._full(object_key)
        try:
            stat = path.stat()
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"object {object_key} not found") from e
        except OSError as e:
            raise StorageError(f"failed to stat {object_key}: {e}") from e
        if not path.is_file():
            raise ObjectNotFoundError(f"object {object_key} not found")
        return ObjectMetadata(
            content_type=self._content_type(path),
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )

    def get_object(self, object_key: str) -> ObjectReader:
        # Size comes from head_object so nothing can fail once the file is open.
        meta = self.head_object(object_key)
        path = self._full(object_key)
        try:
            body = open(path, "rb")
        except FileNotFoundError as e:
            raise ObjectNotFoundError(f"object {object_key} not found") from e
        except OSError as e:
            raise StorageError(f"failed to open {object_key}: {e}") from e
        return ObjectReader(body=body, content_type=meta.content_type, size=meta.size)

    # ---------- helpers for seeding ---------- #
    def put_bytes(self, object_key: str, data: bytes) -> None:
        dst = self._full(object_key)
        dst.parent.mkdir(parents=True, exist_ok=True)
        dst.write_bytes(data)
