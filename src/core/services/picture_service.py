"""Abstract contract for picture management."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime

from core.models.pagination import PagedList
from core.models.picture import Picture, PictureSize, PictureType, ProductPicture
from core.utils.constants import DEFAULT_PAGE_INDEX, DEFAULT_PAGE_SIZE


class PictureService(ABC):
    """Contract for storing pictures and resolving their public URLs.

    Handlers depend on this interface, not on the implementation.
    """

    @abstractmethod
    def validate_picture(self, picture_binary: bytes) -> bytes:
        """Check a picture binary against the media settings.

        Returns:
            The binary, unchanged

        Raises:
            ValidationError: If the binary is empty or not a readable image
            FileSizeError: If the binary exceeds the maximum file size
            ImageDimensionsError: If the longest side exceeds the maximum image size
        """

    @abstractmethod
    def find_equal_picture(
        self,
        picture_binary: bytes,
        pictures: Sequence[Picture],
    ) -> tuple[bytes | None, str | None]:
        """Look for a picture whose binary equals `picture_binary`.

        Returns:
            `(None, equal_picture_id)` when a match exists,
            `(picture_binary, None)` otherwise
        """

    @abstractmethod
    def get_picture_se_name(self, name: str | None) -> str:
        """Return the SEO friendly slug for a display name."""

    @abstractmethod
    def set_seo_filename(self, picture_id: str, seo_filename: str) -> Picture | None:
        """Update the SEO filename of a picture.

        Returns:
            The picture, or None if it does not exist
        """

    @abstractmethod
    def load_picture_binary(self, picture: Picture) -> bytes:
        """Return the picture binary, or empty bytes when none is stored."""

    @abstractmethod
    def get_picture_size(self, picture: Picture) -> PictureSize:
        """Return the pixel dimensions of a picture."""

    @abstractmethod
    def get_picture_url(
        self,
        picture_or_id: Picture | str | None,
        target_size: int = 0,
        show_default_picture: bool = True,
        store_location: str | None = None,
        default_picture_type: PictureType = PictureType.ENTITY,
    ) -> str:
        """Resolve the public URL of a picture scaled to `target_size`.

        A `target_size` of 0 keeps the original dimensions. Missing pictures
        resolve to the default picture URL, or "" if `show_default_picture`
        is False.
        """

    @abstractmethod
    def get_default_picture_url(
        self,
        target_size: int = 0,
        default_picture_type: PictureType = PictureType.ENTITY,
        store_location: str | None = None,
    ) -> str:
        """Resolve the URL of the default picture for a picture type."""

    @abstractmethod
    def get_picture_by_id(self, picture_id: str) -> Picture | None:
        """Fetch a picture, or None if not found."""

    @abstractmethod
    def get_pictures(
        self,
        page_index: int = DEFAULT_PAGE_INDEX,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedList[Picture]:
        """Return one page of pictures, newest first.

        Raises:
            FilterError: If the paging parameters are out of range
        """

    @abstractmethod
    def get_pictures_by_product_id(self, product_id: str, records_to_return: int = 0) -> list[Picture]:
        """Return pictures mapped to a product ordered by display order.

        A `records_to_return` of 0 returns all of them.
        """

    @abstractmethod
    def get_pictures_by_ids(self, picture_ids: Sequence[str]) -> list[Picture]:
        """Return pictures in the requested order, skipping unknown ids."""

    @abstractmethod
    def delete_picture(self, picture: Picture) -> None:
        """Delete a picture with its thumbnails, binary and product mappings."""

    @abstractmethod
    def insert_picture(
        self,
        picture_binary: bytes,
        mime_type: str,
        seo_filename: str | None,
        is_new: bool,
        is_transient: bool = True,
        validate_binary: bool = True,
    ) -> Picture:
        """Store a new picture and return its record."""

    @abstractmethod
    def update_picture(
        self,
        picture: Picture,
        picture_binary: bytes,
        mime_type: str,
        seo_filename: str | None,
        is_new: bool,
        validate_binary: bool = True,
    ) -> None:
        """Replace the binary and attributes of an existing picture."""

    @abstractmethod
    def insert_product_picture(
        self,
        product_id: str,
        picture_id: str,
        display_order: int = 0,
    ) -> ProductPicture:
        """Map a picture to a product, which makes the picture permanent.

        Raises:
            NotFoundError: If the picture does not exist
        """

    @abstractmethod
    def delete_product_picture(self, product_id: str, picture_id: str) -> None:
        """Remove a picture from a product."""

    @abstractmethod
    def delete_transient_pictures(self, older_than: datetime) -> int:
        """Delete transient pictures created before `older_than`.

        Returns:
            Number of deleted pictures
        """


def update_picture_by_id(
    service: PictureService,
    picture_id: str,
    picture_binary: bytes,
    mime_type: str,
    seo_filename: str | None,
    is_new: bool,
    validate_binary: bool = True,
) -> Picture | None:
    """Load a picture by id and update it.

    Returns:
        The updated picture, or None if it does not exist
    """
    picture = service.get_picture_by_id(picture_id)
    if picture is None:
        return None

    service.update_picture(
        picture,
        picture_binary,
        mime_type,
        seo_filename,
        is_new,
        validate_binary=validate_binary,
    )
    return picture
