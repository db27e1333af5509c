"""Business logic for picture upload operations.

This module coordinates duplicate detection, picture insertion and
product mapping for uploads while translating failures into
domain-specific errors.
"""

import base64
import binascii

from aws_lambda_powertools import Logger

from core.models.errors import DuplicatePictureError, PictureServiceError, ValidationError
from core.models.picture import Picture
from core.services.default_picture_service import DefaultPictureService
from core.services.picture_service import PictureService

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for picture uploads.

    This service orchestrates:
    - File decoding
    - Duplicate detection against the product's pictures
    - Inserting the picture
    - Attaching the picture to a product
    """

    def __init__(self, picture_service: PictureService | None = None) -> None:
        """Initialize the upload service with the picture service."""
        self.pictures = picture_service or DefaultPictureService()

    @staticmethod
    def decode_file(encoded: str) -> bytes:
        """Decode base64-encoded picture data.

        Raises:
            ValidationError: If decoding fails
        """
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.exception("Failed to decode base64 picture data")
            raise ValidationError(
                message="Invalid picture data",
                details={"encoding": "base64"},
            ) from exc

    def upload_picture(
        self,
        *,
        file_data: bytes,
        mime_type: str | None = None,
        seo_filename: str | None = None,
        is_new: bool = True,
        product_id: str | None = None,
        display_order: int = 0,
    ) -> Picture:
        """Upload a picture and optionally attach it to a product.

        The upload flow is:
        1. Reject binaries equal to a picture the product already has
        2. Insert the picture
        3. Attach it to the product
        4. Roll back the picture if attaching fails

        Raises:
            ValidationError: If the picture is invalid
            DuplicatePictureError: If the product already has an equal picture
            S3Error: If storage upload fails
            MetadataOperationFailedError: If record persistence fails
        """
        logger.debug("Starting picture upload", extra={"product_id": product_id})

        # Step 1: Detect duplicate picture within the product gallery
        if product_id:
            existing = self.pictures.get_pictures_by_product_id(product_id)
            _, equal_picture_id = self.pictures.find_equal_picture(file_data, existing)

            if equal_picture_id:
                logger.info(
                    "Duplicate picture detected",
                    extra={"product_id": product_id, "picture_id": equal_picture_id},
                )
                raise DuplicatePictureError(
                    message="This picture already exists for the product",
                    details={"product_id": product_id, "picture_id": equal_picture_id},
                )

        # Step 2: Insert picture
        picture = self.pictures.insert_picture(
            file_data,
            mime_type or "",
            self.pictures.get_picture_se_name(seo_filename),
            is_new,
        )

        if not product_id:
            return picture

        # Step 3: Attach to product (rollback picture on failure)
        try:
            self.pictures.insert_product_picture(
                product_id,
                picture.picture_id,
                display_order,
            )
        except PictureServiceError:
            logger.exception(
                "Failed to attach picture to product",
                extra={"picture_id": picture.picture_id, "product_id": product_id},
            )

            # Best-effort cleanup to avoid orphaned pictures
            try:
                self.pictures.delete_picture(picture)
            except PictureServiceError:
                logger.warning(
                    "Failed to clean up picture after mapping failure",
                    extra={"picture_id": picture.picture_id},
                )
            raise

        picture.is_transient = False

        logger.info(
            "Picture uploaded successfully",
            extra={"picture_id": picture.picture_id, "product_id": product_id},
        )
        return picture
