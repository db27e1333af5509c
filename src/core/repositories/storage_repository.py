"""Abstract contract for picture file storage."""

from abc import ABC, abstractmethod


class PictureStorageRepository(ABC):
    """Contract for storing and retrieving picture binaries and thumbnails.

    Implementations could be S3, GCS, local disk, etc.
    The picture service depends on this interface, not the implementation.
    """

    @abstractmethod
    def upload_object(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        metadata: dict[str, str] | None = None,
    ) -> str:
        """Store a binary under `key` and return the key.

        Raises:
            PictureUploadFailedError: If upload fails
        """

    @abstractmethod
    def download_object(self, *, key: str) -> bytes | None:
        """Return the binary stored under `key`, or None if it does not exist.

        Raises:
            PictureDownloadFailedError: If download fails
        """

    @abstractmethod
    def object_exists(self, *, key: str) -> bool:
        """Return True if an object is stored under `key`."""

    @abstractmethod
    def remove_object(self, *, key: str) -> None:
        """Delete the object stored under `key`.

        Raises:
            PictureDeletionFailedError: If deletion fails
        """

    @abstractmethod
    def list_keys(self, *, prefix: str) -> list[str]:
        """List object keys starting with `prefix`."""
