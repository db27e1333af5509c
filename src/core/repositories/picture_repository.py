"""Abstract contracts for picture record persistence."""

from abc import ABC, abstractmethod

from core.models.picture import Picture, ProductPicture


class PictureRepository(ABC):
    """Contract for storing and retrieving picture records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    The picture service depends on this interface, not the implementation.
    """

    @abstractmethod
    def create_picture(self, *, picture: Picture) -> None:
        """Persist a new picture record.

        Raises:
            DuplicatePictureError: If a record with the same id already exists
            DynamoDBError: If creation fails for other reasons
        """

    @abstractmethod
    def update_picture(self, *, picture: Picture) -> None:
        """Replace an existing picture record.

        Raises:
            NotFoundError: If the record does not exist
            DynamoDBError: If the update fails
        """

    @abstractmethod
    def fetch_picture(self, *, picture_id: str) -> Picture | None:
        """Fetch a single picture record, or None if not found."""

    @abstractmethod
    def fetch_pictures(self, *, picture_ids: list[str]) -> list[Picture]:
        """Fetch several records, in the requested order, skipping unknown ids."""

    @abstractmethod
    def remove_picture(self, *, picture_id: str) -> None:
        """Remove a picture record. Removing a missing record is not an error."""

    @abstractmethod
    def list_pictures(self) -> list[Picture]:
        """List all picture records, newest first."""

    @abstractmethod
    def list_transient_pictures(self, *, created_before: str) -> list[Picture]:
        """List transient pictures created strictly before an ISO-8601 timestamp."""


class ProductPictureRepository(ABC):
    """Contract for product to picture mappings."""

    @abstractmethod
    def create_mapping(self, *, mapping: ProductPicture) -> None:
        """Create or replace a product picture mapping."""

    @abstractmethod
    def remove_mapping(self, *, product_id: str, picture_id: str) -> None:
        """Remove a single mapping."""

    @abstractmethod
    def list_product_pictures(self, *, product_id: str) -> list[ProductPicture]:
        """List mappings for a product ordered by display order."""

    @abstractmethod
    def list_picture_products(self, *, picture_id: str) -> list[ProductPicture]:
        """List mappings that reference a picture."""
