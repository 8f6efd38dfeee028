"""Shared fixtures for s3share tests."""
from datetime import datetime, timedelta, timezone
from typing import List, Tuple

import pytest
from fastapi.testclient import TestClient

from s3share.cache import InMemorySecretCache
from s3share.configs.config import Config
from s3share.main import create_app
from s3share.services.share_service import ShareService
from s3share.storage import LocalStore

NOW = datetime(2026, 10, 18, 12, 0, 0, tzinfo=timezone.utc)
BASE_URL = "https://share.example.com"
PHOTO_BYTES = b"\xff\xd8\xff\xe0" + b"jpeg-body" * 100


class FixedClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.current = now

    def __call__(self) -> datetime:
        return self.current

    def set(self, moment: datetime) -> None:
        self.current = moment

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class RecordingStore:
    """Wraps an object store and records every call made to it."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: List[Tuple[str, str]] = []

    def head_object(self, object_key):
        self.calls.append(("head_object", object_key))
        return self.inner.head_object(object_key)

    def get_object(self, object_key):
        self.calls.append(("get_object", object_key))
        return self.inner.get_object(object_key)


class RecordingCache:
    """Wraps a secret cache and records every call made to it."""

    def __init__(self, inner):
        self.inner = inner
        self.calls: List[Tuple[str, str]] = []

    def set(self, key, value, ttl):
        self.calls.append(("set", key))
        self.inner.set(key, value, ttl)

    def get(self, key):
        self.calls.append(("get", key))
        return self.inner.get(key)

    def delete(self, key):
        self.calls.append(("delete", key))
        self.inner.delete(key)


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def local_store(tmp_path):
    store = LocalStore(base_path=str(tmp_path / "objects"))
    store.put_bytes("images/photo.jpg", PHOTO_BYTES)
    store.put_bytes("docs/readme.txt", b"hello")
    return store


@pytest.fixture
def store(local_store):
    return RecordingStore(local_store)


@pytest.fixture
def cache():
    return RecordingCache(InMemorySecretCache())


@pytest.fixture
def service(store, cache, clock):
    return ShareService(
        store=store,
        cache=cache,
        base_url=BASE_URL,
        max_age_days=90,
        clock=clock,
    )


@pytest.fixture
def config(tmp_path):
    return Config(
        storage_backend="local",
        local_path=str(tmp_path / "objects"),
        cache_backend="memory",
        base_url=BASE_URL,
    )


@pytest.fixture
def app(config, store, cache, clock):
    return create_app(config, store=store, cache=cache, clock=clock)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def photo_bytes():
    return PHOTO_BYTES
