"""Business logic for picture update operations."""

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.models.picture import Picture
from core.services.default_picture_service import DefaultPictureService
from core.services.picture_service import PictureService, update_picture_by_id
from core.utils.constants import ERROR_CODE_PICTURE_NOT_FOUND

logger = Logger(UTC=True)


class UpdateService:
    """Application service responsible for picture updates.

    A request without a binary keeps the stored one and only renames
    the picture.
    """

    def __init__(self, picture_service: PictureService | None = None) -> None:
        self.pictures = picture_service or DefaultPictureService()

    def update_picture(
        self,
        picture_id: str,
        *,
        file_data: bytes | None = None,
        mime_type: str | None = None,
        seo_filename: str | None = None,
        is_new: bool = True,
    ) -> Picture:
        """Update a picture's binary and/or SEO filename.

        Raises:
            NotFoundError: If the picture does not exist
            ValidationError: If the replacement binary is invalid
        """
        logger.debug("Starting picture update", extra={"picture_id": picture_id})

        if file_data is None:
            picture = self._rename(picture_id, seo_filename)
        elif seo_filename is None:
            # Keep the current name when only the binary changes
            picture = self.pictures.get_picture_by_id(picture_id)
            if picture is not None:
                self.pictures.update_picture(
                    picture,
                    file_data,
                    mime_type or "",
                    picture.seo_filename,
                    is_new,
                )
        else:
            picture = update_picture_by_id(
                self.pictures,
                picture_id,
                file_data,
                mime_type or "",
                self.pictures.get_picture_se_name(seo_filename),
                is_new,
            )

        if picture is None:
            logger.warning("Picture not found", extra={"picture_id": picture_id})
            raise NotFoundError(
                message="Picture not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        logger.info("Picture updated", extra={"picture_id": picture_id})
        return picture

    def _rename(self, picture_id: str, seo_filename: str | None) -> Picture | None:
        return self.pictures.set_seo_filename(
            picture_id,
            self.pictures.get_picture_se_name(seo_filename),
        )
