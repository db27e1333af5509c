"""Unit tests for S3PictureStorage."""

from collections.abc import Callable
from typing import Any

import pytest
from botocore.exceptions import ClientError

from core.infrastructure.aws.s3_picture_storage import S3PictureStorage
from core.models.errors import (
    PictureDeletionFailedError,
    PictureDownloadFailedError,
    PictureUploadFailedError,
    S3Error,
)


class DummyS3Adapter:
    """S3 adapter stub whose operations can be swapped per test."""

    put_object: Callable[..., None]
    get_object: Callable[..., Any]
    head_object: Callable[..., Any]
    delete_object: Callable[..., None]
    list_keys: Callable[..., list[str]]

    def __init__(self) -> None:
        self.put_object = lambda **_: None
        self.get_object = lambda **_: {}
        self.head_object = lambda **_: {}
        self.delete_object = lambda **_: None
        self.list_keys = lambda **_: []


def _raise(code: str, operation: str) -> Callable[..., Any]:
    def _raiser(**_: Any) -> Any:
        raise ClientError({"Error": {"Code": code}}, operation)

    return _raiser


class TestS3PictureStorageStubbed:
    def test_upload_failure(self) -> None:
        adapter = DummyS3Adapter()
        adapter.put_object = _raise("AccessDenied", "PutObject")

        with pytest.raises(PictureUploadFailedError) as exc:
            S3PictureStorage(adapter).upload_object(key="pictures/a.png", file_data=b"x", mime_type="image/png")

        assert exc.value.details == {"key": "pictures/a.png"}

    def test_download_other_failure(self) -> None:
        adapter = DummyS3Adapter()
        adapter.get_object = _raise("AccessDenied", "GetObject")

        with pytest.raises(PictureDownloadFailedError):
            S3PictureStorage(adapter).download_object(key="pictures/a.png")

    def test_object_exists_other_failure(self) -> None:
        adapter = DummyS3Adapter()
        adapter.head_object = _raise("403", "HeadObject")

        with pytest.raises(S3Error):
            S3PictureStorage(adapter).object_exists(key="pictures/a.png")

    def test_remove_failure(self) -> None:
        adapter = DummyS3Adapter()
        adapter.delete_object = _raise("AccessDenied", "DeleteObject")

        with pytest.raises(PictureDeletionFailedError):
            S3PictureStorage(adapter).remove_object(key="pictures/a.png")

    def test_list_keys_failure(self) -> None:
        adapter = DummyS3Adapter()
        adapter.list_keys = _raise("AccessDenied", "ListObjectsV2")

        with pytest.raises(S3Error):
            S3PictureStorage(adapter).list_keys(prefix="thumbs/")


class TestS3PictureStorageMoto:
    def test_upload_and_download(self, s3_bucket, s3_client) -> None:
        storage = S3PictureStorage()

        key = storage.upload_object(
            key="pictures/pic_1.png",
            file_data=b"png-bytes",
            mime_type="image/png",
            metadata={"picture_id": "pic_1"},
        )

        assert key == "pictures/pic_1.png"
        assert storage.download_object(key=key) == b"png-bytes"

        head = s3_client.head_object(Bucket=s3_bucket, Key=key)
        assert head["ContentType"] == "image/png"
        assert head["Metadata"] == {"picture_id": "pic_1"}

    def test_download_missing_returns_none(self, s3_bucket) -> None:
        assert S3PictureStorage().download_object(key="pictures/missing.png") is None

    def test_object_exists(self, s3_bucket, s3_put_object) -> None:
        storage = S3PictureStorage()
        s3_put_object("thumbs/pic_1_100.png", b"thumb", "image/png")

        assert storage.object_exists(key="thumbs/pic_1_100.png") is True
        assert storage.object_exists(key="thumbs/pic_1_200.png") is False

    def test_remove_object(self, s3_bucket, s3_put_object, s3_keys) -> None:
        storage = S3PictureStorage()
        s3_put_object("pictures/pic_1.png", b"data", "image/png")

        storage.remove_object(key="pictures/pic_1.png")

        assert s3_keys("pictures/") == []

    def test_list_keys(self, s3_bucket, s3_put_object) -> None:
        storage = S3PictureStorage()
        s3_put_object("thumbs/pic_1.png", b"1")
        s3_put_object("thumbs/pic_1_100.png", b"2")
        s3_put_object("pictures/pic_1.png", b"3")

        assert sorted(storage.list_keys(prefix="thumbs/")) == ["thumbs/pic_1.png", "thumbs/pic_1_100.png"]
