"""
Business logic for picture retrieval.

This module coordinates resolution of public picture URLs and direct
download of stored picture binaries.
"""

from aws_lambda_powertools import Logger

from core.models.errors import NotFoundError
from core.models.picture import Picture, PictureType
from core.services.default_picture_service import DefaultPictureService
from core.services.picture_service import PictureService
from core.utils.constants import ERROR_CODE_PICTURE_NOT_FOUND

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for retrieving pictures.

    This service orchestrates:
    - Fetching picture records
    - Resolving thumbnail URLs, with default picture fallback
    - Loading picture binaries for download
    """

    def __init__(self, picture_service: PictureService | None = None) -> None:
        self.pictures = picture_service or DefaultPictureService()

    def resolve_picture_url(
        self,
        picture_id: str,
        *,
        target_size: int = 0,
        show_default_picture: bool = True,
        store_location: str | None = None,
        default_picture_type: PictureType = PictureType.ENTITY,
    ) -> tuple[str, Picture | None]:
        """
        Resolve the public URL of a picture at a target size.

        Returns:
            Tuple of (url, picture); picture is None when the default
            picture was used

        Raises:
            NotFoundError: If no URL can be resolved
        """
        logger.debug(
            "Resolving picture URL",
            extra={"picture_id": picture_id, "target_size": target_size},
        )

        picture = self.pictures.get_picture_by_id(picture_id)

        url = self.pictures.get_picture_url(
            picture,
            target_size=target_size,
            show_default_picture=show_default_picture,
            store_location=store_location,
            default_picture_type=default_picture_type,
        )

        if not url:
            logger.warning(
                "Picture URL could not be resolved",
                extra={"picture_id": picture_id},
            )
            raise NotFoundError(
                message="Picture not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        if picture is not None and not self._is_picture_url(url, picture):
            logger.info(
                "Picture binary is missing, default picture used",
                extra={"picture_id": picture_id},
            )
            picture = None

        logger.info(
            "Picture URL resolved",
            extra={"picture_id": picture_id, "target_size": target_size},
        )
        return url, picture

    def download_picture(self, picture_id: str) -> tuple[Picture, bytes]:
        """
        Load a picture together with its binary.

        Raises:
            NotFoundError: If the picture or its binary does not exist
        """
        picture = self.pictures.get_picture_by_id(picture_id)

        if picture is None:
            logger.warning("Picture not found", extra={"picture_id": picture_id})
            raise NotFoundError(
                message="Picture not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        picture_binary = self.pictures.load_picture_binary(picture)
        if not picture_binary:
            logger.warning("Picture binary is missing", extra={"picture_id": picture_id})
            raise NotFoundError(
                message="Picture binary not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        return picture, picture_binary

    @staticmethod
    def _is_picture_url(url: str, picture: Picture) -> bool:
        """Thumbnail file names of a picture start with "<id>_" or "<id>."."""
        file_name = url.rsplit("/", 1)[-1]
        return file_name.startswith((f"{picture.picture_id}_", f"{picture.picture_id}."))

    @staticmethod
    def download_filename(picture: Picture) -> str:
        """Return the attachment filename for a picture."""
        return f"{picture.seo_filename or picture.picture_id}.{picture.extension}"
