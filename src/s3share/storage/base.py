# s3share/storage/base.py
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Iterator, Optional, Protocol, runtime_checkable

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class ObjectMetadata:
    content_type: str
    size: int
    last_modified: Optional[datetime] = None


class ObjectReader:
    """
    Single-use streaming handle over an object's bytes.

    Whoever receives a reader owns it and must close it. ``close()`` only
    releases the underlying stream the first time it is called, so several
    cleanup paths can call it safely.
    """

    def __init__(self, body: BinaryIO, content_type: str, size: int):
        self._body = body
        self.content_type = content_type or DEFAULT_CONTENT_TYPE
        self.size = size
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, amt: Optional[int] = None) -> bytes:
        if amt is None:
            return self._body.read()
        return self._body.read(amt)

    def iter_chunks(self, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
        while True:
            chunk = self._body.read(chunk_size)
            if not chunk:
                break
            yield chunk

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._body.close()

    def __enter__(self) -> "ObjectReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@runtime_checkable
class ObjectStore(Protocol):
    """
    Read contract the share service needs from a blob store.

    Every method is synchronous and may block; callers run them off the
    event loop. Missing objects raise ``ObjectNotFoundError``, any other
    backend failure raises ``StorageError``. Implementations do not retry.
    """

    def head_object(self, object_key: str) -> ObjectMetadata:
        """Return metadata for *object_key* without fetching its bytes."""
        ...

    def get_object(self, object_key: str) -> ObjectReader:
        """Open *object_key* for streaming. The caller owns the reader."""
        ...
