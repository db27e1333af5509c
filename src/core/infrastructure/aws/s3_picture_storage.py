"""S3-backed implementation of PictureStorageRepository."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    PictureDeletionFailedError,
    PictureDownloadFailedError,
    PictureUploadFailedError,
    S3Error,
)
from core.repositories.storage_repository import PictureStorageRepository

logger = Logger(UTC=True)

_MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


def _is_missing_object(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") in _MISSING_OBJECT_CODES


class S3PictureStorage(PictureStorageRepository):
    """Picture and thumbnail storage backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def upload_object(
        self,
        *,
        key: str,
        file_data: bytes,
        mime_type: str,
        metadata: dict[str, str] | None = None,
    ) -> str:
        """Upload bytes to S3 and return the object key."""
        logger.debug(
            "Uploading object",
            extra={"key": key, "size": len(file_data), "mime_type": mime_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=file_data,
                content_type=mime_type,
                metadata=metadata or {},
            )
        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key})
            raise PictureUploadFailedError(
                message="Unable to upload picture at this time",
                details={"key": key},
            ) from exc

        logger.info("Object uploaded successfully", extra={"key": key})
        return key

    def download_object(self, *, key: str) -> bytes | None:
        """Download object bytes from S3, or None when the key is absent."""
        logger.debug("Downloading object", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body: bytes = response["Body"].read()
        except ClientError as exc:
            if _is_missing_object(exc):
                logger.debug("Object not found", extra={"key": key})
                return None

            logger.error("S3 download failed", extra={"key": key})
            raise PictureDownloadFailedError(
                message="Unable to download picture at this time",
                details={"key": key},
            ) from exc

        logger.debug("Object downloaded", extra={"key": key, "size": len(body)})
        return body

    def object_exists(self, *, key: str) -> bool:
        try:
            self._s3.head_object(key=key)
        except ClientError as exc:
            if _is_missing_object(exc):
                return False

            logger.error("S3 head_object failed", extra={"key": key})
            raise S3Error(
                message="Unable to check picture storage",
                details={"key": key},
            ) from exc

        return True

    def remove_object(self, *, key: str) -> None:
        """Delete an object from S3."""
        logger.debug("Deleting object", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
        except ClientError as exc:
            logger.error("S3 deletion failed", extra={"key": key})
            raise PictureDeletionFailedError(
                message="Unable to delete picture at this time",
                details={"key": key},
            ) from exc

        logger.info("Object deleted successfully", extra={"key": key})

    def list_keys(self, *, prefix: str) -> list[str]:
        try:
            return self._s3.list_keys(prefix=prefix)
        except ClientError as exc:
            logger.error("S3 list failed", extra={"prefix": prefix})
            raise S3Error(
                message="Unable to list stored pictures",
                details={"prefix": prefix},
            ) from exc
