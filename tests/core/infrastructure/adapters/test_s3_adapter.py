import pytest
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.utils.constants import ENV_PICTURE_S3_BUCKET_NAME


class TestS3Adapter:
    def test_init_missing_bucket_env(self, monkeypatch):
        monkeypatch.delenv(ENV_PICTURE_S3_BUCKET_NAME, raising=False)

        with pytest.raises(RuntimeError):
            S3Adapter()

    def test_put_and_get_object_success(self, s3_bucket):
        adapter = S3Adapter()

        adapter.put_object(
            key="pictures/pic_1.png",
            body=b"picture-bytes",
            content_type="image/png",
            metadata={"picture_id": "pic_1"},
        )

        response = adapter.get_object(key="pictures/pic_1.png")

        assert response["Body"].read() == b"picture-bytes"
        assert response["ContentType"] == "image/png"
        assert response["Metadata"] == {"picture_id": "pic_1"}

    def test_get_object_missing_key_raises_client_error(self, s3_bucket):
        adapter = S3Adapter()

        with pytest.raises(ClientError) as exc:
            adapter.get_object(key="pictures/missing.png")

        assert exc.value.response["Error"]["Code"] == "NoSuchKey"

    def test_head_object_missing_key_raises_client_error(self, s3_bucket):
        adapter = S3Adapter()

        with pytest.raises(ClientError) as exc:
            adapter.head_object(key="pictures/missing.png")

        assert exc.value.response["Error"]["Code"] == "404"

    def test_delete_object_success(self, s3_bucket, s3_put_object, s3_keys):
        adapter = S3Adapter()
        s3_put_object("thumbs/pic_1_100.png", b"data", "image/png")

        adapter.delete_object(key="thumbs/pic_1_100.png")

        assert s3_keys("thumbs/") == []

    def test_list_keys_by_prefix(self, s3_bucket, s3_put_object):
        adapter = S3Adapter()
        s3_put_object("thumbs/pic_1_a.png", b"1")
        s3_put_object("thumbs/pic_1_a_100.png", b"2")
        s3_put_object("thumbs/pic_2.png", b"3")

        keys = adapter.list_keys(prefix="thumbs/pic_1")

        assert sorted(keys) == ["thumbs/pic_1_a.png", "thumbs/pic_1_a_100.png"]
