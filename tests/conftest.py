"""
Pytest configuration and fixtures for picture service tests.
Provides AWS mocking, DynamoDB and S3 fixtures and Pillow-built sample pictures.
"""

import io
import os
import struct
import zlib
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from moto import mock_aws
from PIL import Image

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("PICTURE_TABLE_NAME", "pictures-test")
os.environ.setdefault("PRODUCT_PICTURE_TABLE_NAME", "product-pictures-test")
os.environ.setdefault("PICTURE_S3_BUCKET_NAME", "pictures-bucket-test")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "picture-service")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "PictureService")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
# Moto only intercepts requests sent to the real AWS endpoints
os.environ.pop("AWS_ENDPOINT_URL", None)

from core.models.picture import Picture  # noqa: E402
from core.services.default_picture_service import DefaultPictureService  # noqa: E402
from core.utils.constants import PRODUCT_PICTURE_INDEX_NAME  # noqa: E402
from core.utils.settings import MediaSettings  # noqa: E402


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def picture_table(dynamodb_resource):
    """Picture record table keyed by picture_id."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("PICTURE_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "picture_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "picture_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def product_picture_table(dynamodb_resource):
    """Product mapping table with the picture-product GSI."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("PRODUCT_PICTURE_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[
            {"AttributeName": "product_id", "KeyType": "HASH"},
            {"AttributeName": "picture_id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "product_id", "AttributeType": "S"},
            {"AttributeName": "picture_id", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": PRODUCT_PICTURE_INDEX_NAME,
                "KeySchema": [{"AttributeName": "picture_id", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client) -> str:
    bucket_name = os.environ["PICTURE_S3_BUCKET_NAME"]
    s3_client.create_bucket(Bucket=bucket_name)
    return bucket_name


@pytest.fixture
def s3_put_object(s3_client, s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("defaults/default-image.gif", gif_bytes, "image/gif")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_client.put_object(Bucket=s3_bucket, Key=key, Body=body, ContentType=content_type)

    return _put


@pytest.fixture
def s3_get_object(s3_client, s3_bucket) -> Callable[[str], bytes]:
    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_client.get_object(Bucket=s3_bucket, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_client, s3_bucket) -> Callable[[str], list[str]]:
    """Helper listing object keys under a prefix."""

    def _keys(prefix: str = "") -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket, Prefix=prefix)
        return sorted(obj["Key"] for obj in response.get("Contents", []))

    return _keys


@pytest.fixture
def aws_resources(picture_table, product_picture_table, s3_bucket) -> None:
    """All tables and the bucket the picture service needs."""


# ============================================================================
# Sample pictures
# ============================================================================


def make_picture(
    width: int = 8,
    height: int = 6,
    fmt: str = "PNG",
    color: tuple[int, int, int] = (200, 30, 30),
) -> bytes:
    """Encode a solid-colour picture with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format=fmt)
    return buffer.getvalue()


def make_png_header(width: int, height: int) -> bytes:
    """Encode a 1-bit PNG declaring the given size with truncated pixel data."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", zlib.crc32(tag + data))

    header = struct.pack(">IIBBBBB", width, height, 1, 0, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(b"\x00" * 64)[:8])
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def png_header_factory() -> Callable[[int, int], bytes]:
    return make_png_header


@pytest.fixture
def picture_factory() -> Callable[..., bytes]:
    return make_picture


@pytest.fixture
def sample_png_binary() -> bytes:
    """8x6 PNG."""
    return make_picture(8, 6, "PNG")


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """40x20 JPEG."""
    return make_picture(40, 20, "JPEG", (10, 120, 200))


@pytest.fixture
def sample_gif_binary() -> bytes:
    return make_picture(16, 16, "GIF", (0, 0, 0))


@pytest.fixture
def media_settings() -> MediaSettings:
    return MediaSettings(store_location="https://shop.example.com/")


@pytest.fixture
def picture_service(aws_resources, media_settings) -> DefaultPictureService:
    """Picture service wired to moto-backed DynamoDB tables and S3 bucket."""
    return DefaultPictureService(settings=media_settings)


@pytest.fixture
def db_picture_service(aws_resources) -> DefaultPictureService:
    """Picture service storing binaries in the picture record."""
    return DefaultPictureService(
        settings=MediaSettings(store_in_db=True, store_location="https://shop.example.com/"),
    )


@pytest.fixture
def sample_picture() -> Picture:
    return Picture(
        picture_id="pic_sample",
        mime_type="image/png",
        seo_filename="red-square",
        is_new=False,
        is_transient=False,
        storage_key="pictures/pic_sample.png",
        file_size=100,
        file_hash="abc",
        width=8,
        height=6,
        created_at="2024-01-01T10:00:00+00:00",
    )
