"""Tests for the object store adapters."""
import io
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from s3share.configs.config import Config
from s3share.error_handling.errors import ObjectNotFoundError, StorageError
from s3share.storage import LocalStore, ObjectReader, ObjectStore, S3Store, get_store


def client_error(code: str, operation: str = "HeadObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestObjectReader:
    def test_close_releases_body_once(self):
        body = MagicMock()
        reader = ObjectReader(body, "text/plain", 3)
        reader.close()
        reader.close()
        body.close.assert_called_once()
        assert reader.closed

    def test_iter_chunks_is_bounded(self):
        reader = ObjectReader(io.BytesIO(b"x" * 10), "text/plain", 10)
        chunks = list(reader.iter_chunks(chunk_size=4))
        assert chunks == [b"xxxx", b"xxxx", b"xx"]

    def test_defaults_content_type(self):
        assert ObjectReader(io.BytesIO(), "", 0).content_type == "application/octet-stream"


class TestLocalStore:
    def test_satisfies_protocol(self, local_store):
        assert isinstance(local_store, ObjectStore)

    def test_head_object(self, local_store, photo_bytes):
        meta = local_store.head_object("images/photo.jpg")
        assert meta.content_type == "image/jpeg"
        assert meta.size == len(photo_bytes)
        assert meta.last_modified.tzinfo is not None

    def test_get_object_streams_bytes(self, local_store):
        with local_store.get_object("docs/readme.txt") as reader:
            assert reader.content_type == "text/plain"
            assert reader.read() == b"hello"

    def test_missing_object(self, local_store):
        with pytest.raises(ObjectNotFoundError):
            local_store.head_object("nope.txt")
        with pytest.raises(ObjectNotFoundError):
            local_store.get_object("nope.txt")

    def test_directory_is_not_an_object(self, local_store):
        with pytest.raises(ObjectNotFoundError):
            local_store.head_object("images")

    def test_stat_failure_leaves_no_open_file(self, local_store, monkeypatch):
        real_stat = Path.stat

        def failing_stat(self, *args, **kwargs):
            if self.name == "photo.jpg":
                raise PermissionError(13, "denied")
            return real_stat(self, *args, **kwargs)

        opened = []
        monkeypatch.setattr(Path, "stat", failing_stat)
        monkeypatch.setattr(
            "s3share.storage.local.open", lambda *args: opened.append(args), raising=False
        )

        with pytest.raises(StorageError):
            local_store.get_object("images/photo.jpg")
        assert opened == []

    def test_keys_cannot_escape_root(self, local_store, tmp_path):
        (tmp_path / "outside.txt").write_text("secret")
        with pytest.raises(ObjectNotFoundError):
            local_store.get_object("../outside.txt")


class TestS3Store:
    def test_head_object_maps_metadata(self):
        client = MagicMock()
        modified = datetime(2026, 1, 1, tzinfo=timezone.utc)
        client.head_object.return_value = {
            "ContentType": "image/png",
            "ContentLength": 42,
            "LastModified": modified,
        }
        store = S3Store(bucket="media", client=client)

        meta = store.head_object("images/a.png")

        client.head_object.assert_called_once_with(Bucket="media", Key="images/a.png")
        assert (meta.content_type, meta.size, meta.last_modified) == ("image/png", 42, modified)

    def test_prefix_is_prepended(self):
        client = MagicMock()
        client.head_object.return_value = {"ContentLength": 1}
        store = S3Store(bucket="media", prefix="/tenant-a/", client=client)

        store.head_object("a.png")

        client.head_object.assert_called_once_with(Bucket="media", Key="tenant-a/a.png")

    def test_get_object_wraps_body(self):
        client = MagicMock()
        client.get_object.return_value = {
            "Body": io.BytesIO(b"abc"),
            "ContentType": "text/plain",
            "ContentLength": 3,
        }
        store = S3Store(bucket="media", client=client)

        with store.get_object("a.txt") as reader:
            assert (reader.content_type, reader.size) == ("text/plain", 3)
            assert reader.read() == b"abc"

    def test_missing_content_type_defaults(self):
        client = MagicMock()
        client.get_object.return_value = {"Body": io.BytesIO(b""), "ContentLength": 0}
        reader = S3Store(bucket="media", client=client).get_object("a")
        assert reader.content_type == "application/octet-stream"

    @pytest.mark.parametrize("code", ["404", "NoSuchKey", "NotFound"])
    def test_not_found_codes(self, code):
        client = MagicMock()
        client.head_object.side_effect = client_error(code)
        client.get_object.side_effect = client_error(code, "GetObject")
        store = S3Store(bucket="media", client=client)

        with pytest.raises(ObjectNotFoundError):
            store.head_object("a")
        with pytest.raises(ObjectNotFoundError):
            store.get_object("a")

    def test_other_client_errors_are_storage_errors(self):
        client = MagicMock()
        client.head_object.side_effect = client_error("AccessDenied")
        store = S3Store(bucket="media", client=client)

        with pytest.raises(StorageError) as exc_info:
            store.head_object("a")
        assert not isinstance(exc_info.value, ObjectNotFoundError)
        assert isinstance(exc_info.value.__cause__, ClientError)

    def test_connection_errors_are_storage_errors(self):
        client = MagicMock()
        client.get_object.side_effect = EndpointConnectionError(endpoint_url="http://s3")
        store = S3Store(bucket="media", client=client)

        with pytest.raises(StorageError):
            store.get_object("a")

    def test_bucket_is_required(self):
        with pytest.raises(ValueError):
            S3Store(bucket="", client=MagicMock())


class TestGetStore:
    def test_local_backend(self, tmp_path):
        config = Config(storage_backend="local", local_path=str(tmp_path), cache_backend="memory")
        assert isinstance(get_store(config), LocalStore)

    def test_s3_backend(self, monkeypatch):
        created = {}

        def fake_client(service, **kwargs):
            created.update(service=service, **kwargs)
            return MagicMock()

        monkeypatch.setattr("s3share.storage.s3.boto3.client", fake_client)
        config = Config(
            storage_backend="s3",
            s3_bucket="media",
            aws_region="eu-west-1",
            s3_endpoint="http://minio:9000",
        )

        store = get_store(config)

        assert isinstance(store, S3Store)
        assert store.bucket == "media"
        assert created == {
            "service": "s3",
            "endpoint_url": "http://minio:9000",
            "region_name": "eu-west-1",
        }
