"""Business logic for picture deletion."""

from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.services.default_picture_service import DefaultPictureService
from core.services.picture_service import PictureService
from core.utils.constants import ERROR_CODE_PICTURE_NOT_FOUND
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting pictures."""

    def __init__(self, picture_service: PictureService | None = None) -> None:
        self.pictures = picture_service or DefaultPictureService()

    def delete_picture(self, picture_id: str) -> dict[str, Any]:
        """Delete a picture with its thumbnails, binary and product mappings.

        Raises:
            NotFoundError: If the picture does not exist
            S3Error: If storage deletion fails
            MetadataOperationFailedError: If record deletion fails
        """
        logger.debug("Starting picture deletion", extra={"picture_id": picture_id})

        picture = self.pictures.get_picture_by_id(picture_id)
        if picture is None:
            logger.warning("Picture not found", extra={"picture_id": picture_id})
            raise NotFoundError(
                message="Picture not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        self.pictures.delete_picture(picture)

        return {
            "picture_id": picture_id,
            "deleted_at": utc_now_iso(),
        }
