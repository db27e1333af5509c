import base64
import json
from unittest.mock import patch

from core.models.errors import (
    DuplicatePictureError,
    FileSizeError,
    MetadataOperationFailedError,
    PictureUploadFailedError,
)
from handlers.upload_picture.handler import handler


def _event(**payload) -> dict:
    return {"body": json.dumps(payload)}


def _file(data: bytes) -> str:
    return base64.b64encode(data).decode()


class TestUploadPictureHandler:
    def test_upload_success(self, aws_resources, lambda_context, upload_picture_event) -> None:
        response = handler(upload_picture_event, lambda_context)

        assert response["statusCode"] == 201
        body = json.loads(response["body"])

        assert body["picture"]["picture_id"].startswith("pic_")
        assert body["picture"]["seo_filename"] == "red-square"
        assert body["picture"]["width"] == 8
        assert "picture_binary" not in body["picture"]
        assert "storage_key" not in body["picture"]
        assert body["message"] == "Picture uploaded successfully"

    def test_upload_to_product(self, aws_resources, lambda_context, sample_png_binary) -> None:
        response = handler(
            _event(file=_file(sample_png_binary), product_id="prod_1", display_order=1),
            lambda_context,
        )

        assert response["statusCode"] == 201
        body = json.loads(response["body"])
        assert body["product_id"] == "prod_1"
        assert body["picture"]["is_transient"] is False

    def test_upload_duplicate_picture(self, lambda_context, sample_png_binary) -> None:
        with patch(
            "handlers.upload_picture.service.UploadService.upload_picture",
            side_effect=DuplicatePictureError(message="This picture already exists for the product"),
        ):
            response = handler(_event(file=_file(sample_png_binary), product_id="prod_1"), lambda_context)

        assert response["statusCode"] == 409
        assert json.loads(response["body"])["error"] == "DUPLICATE_PICTURE_ERROR"

    def test_upload_invalid_base64(self, lambda_context) -> None:
        response = handler(_event(file="!!!invalid!!!"), lambda_context)

        assert response["statusCode"] == 422

    def test_upload_missing_file(self, lambda_context) -> None:
        response = handler(_event(seo_filename="name"), lambda_context)

        assert response["statusCode"] == 422

    def test_upload_invalid_json(self, lambda_context) -> None:
        response = handler({"body": "{bad-json"}, lambda_context)

        assert response["statusCode"] == 400

    def test_upload_json_array_body(self, lambda_context) -> None:
        response = handler({"body": "[]"}, lambda_context)

        assert response["statusCode"] == 400

    def test_upload_not_a_picture(self, aws_resources, lambda_context) -> None:
        response = handler(_event(file=_file(b"plain text")), lambda_context)

        assert response["statusCode"] == 422
        assert json.loads(response["body"])["error"] == "UNSUPPORTED_MIME_TYPE"

    def test_upload_large_dimensions(self, aws_resources, lambda_context, png_header_factory, s3_keys) -> None:
        response = handler(_event(file=_file(png_header_factory(20000, 20000))), lambda_context)

        assert response["statusCode"] == 422
        assert json.loads(response["body"])["error"] == "IMAGE_DIMENSIONS_EXCEEDED"
        assert s3_keys() == []

    def test_upload_file_size_exceeded(self, lambda_context, sample_png_binary) -> None:
        with patch(
            "handlers.upload_picture.service.UploadService.upload_picture",
            side_effect=FileSizeError(message="Picture exceeds the maximum file size of 4.0 MB"),
        ):
            response = handler(_event(file=_file(sample_png_binary)), lambda_context)

        assert response["statusCode"] == 422
        assert json.loads(response["body"])["error"] == "FILE_SIZE_EXCEEDED"

    def test_upload_storage_failure(self, lambda_context, sample_png_binary) -> None:
        with patch(
            "handlers.upload_picture.service.UploadService.upload_picture",
            side_effect=PictureUploadFailedError(message="S3 down"),
        ):
            response = handler(_event(file=_file(sample_png_binary)), lambda_context)

        assert response["statusCode"] == 500
        assert "S3 down" in json.loads(response["body"])["message"]

    def test_upload_metadata_failure(self, lambda_context, sample_png_binary) -> None:
        with patch(
            "handlers.upload_picture.service.UploadService.upload_picture",
            side_effect=MetadataOperationFailedError(message="DB down", error_code="METADATA_CREATE_FAILED"),
        ):
            response = handler(_event(file=_file(sample_png_binary)), lambda_context)

        assert response["statusCode"] == 500
        assert "DB down" in json.loads(response["body"])["message"]

    def test_upload_unexpected_exception(self, lambda_context, sample_png_binary) -> None:
        with patch(
            "handlers.upload_picture.service.UploadService.upload_picture",
            side_effect=RuntimeError("boom"),
        ):
            response = handler(_event(file=_file(sample_png_binary)), lambda_context)

        assert response["statusCode"] == 500
        assert "Unexpected error occurred" in json.loads(response["body"])["message"]
