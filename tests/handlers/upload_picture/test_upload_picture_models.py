"""Unit tests for upload request validation."""

import base64

import pytest
from pydantic import ValidationError

from handlers.upload_picture.models import PictureUploadRequest


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode()


class TestUploadModels:
    def test_valid_upload_request(self) -> None:
        request = PictureUploadRequest(
            file=_b64(b"picture data"),
            mime_type="IMAGE/PNG",
            seo_filename="Red Square",
            product_id="prod_1",
            display_order=2,
        )

        assert request.mime_type == "image/png"
        assert request.is_new is True
        assert request.display_order == 2

    def test_mime_type_optional(self) -> None:
        request = PictureUploadRequest(file=_b64(b"picture data"), mime_type="")

        assert request.mime_type is None
        assert request.product_id is None

    def test_missing_file(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(seo_filename="name")

    def test_empty_file(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(file="")

    def test_invalid_base64(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(file="!!!invalid!!!")

    def test_unsupported_mime_type(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(file=_b64(b"data"), mime_type="image/tiff")

    def test_negative_display_order(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(file=_b64(b"data"), display_order=-1)

    def test_seo_filename_too_long(self) -> None:
        with pytest.raises(ValidationError):
            PictureUploadRequest(file=_b64(b"data"), seo_filename="a" * 401)
