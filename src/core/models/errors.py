"""Custom exception classes for the picture service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DUPLICATE_PICTURE,
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_IMAGE_DIMENSIONS_EXCEEDED,
    ERROR_CODE_INVALID_FILTER,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_PICTURE_DELETION_FAILED,
    ERROR_CODE_PICTURE_DOWNLOAD_FAILED,
    ERROR_CODE_PICTURE_UPLOAD_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_S3,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class PictureServiceError(Exception):
    """
    Base exception for all picture service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class _DefaultCodeError(PictureServiceError):
    """Picture service error with a class-level default error code."""

    default_error_code: str = ERROR_CODE_VALIDATION_FAILED

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code or self.default_error_code,
            details=details,
        )


class ValidationError(_DefaultCodeError):
    """Raised when request or picture validation fails."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED


class FileSizeError(ValidationError):
    """Raised when the picture binary exceeds the allowed byte size."""

    default_error_code = ERROR_CODE_FILE_SIZE_EXCEEDED


class ImageDimensionsError(ValidationError):
    """Raised when the picture's longest side exceeds the configured maximum."""

    default_error_code = ERROR_CODE_IMAGE_DIMENSIONS_EXCEEDED


class MIMETypeError(ValidationError):
    """Raised when an unsupported MIME type is provided."""

    default_error_code = ERROR_CODE_UNSUPPORTED_MIME_TYPE


class FilterError(ValidationError):
    """Raised when filter or paging parameters are invalid."""

    default_error_code = ERROR_CODE_INVALID_FILTER


class NotFoundError(_DefaultCodeError):
    """Raised when a requested resource is not found."""

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


class DuplicatePictureError(_DefaultCodeError):
    """Raised when an equal picture already exists."""

    default_error_code = ERROR_CODE_DUPLICATE_PICTURE


class MetadataOperationFailedError(_DefaultCodeError):
    """Raised when a picture record operation fails."""

    default_error_code = ERROR_CODE_METADATA_OPERATION_FAILED


class DynamoDBError(MetadataOperationFailedError):
    """Raised when a DynamoDB operation fails."""

    default_error_code = ERROR_CODE_DYNAMODB


class S3Error(_DefaultCodeError):
    """Raised when a picture storage operation fails."""

    default_error_code = ERROR_CODE_S3


class PictureUploadFailedError(S3Error):
    """Raised when a picture binary cannot be stored."""

    default_error_code = ERROR_CODE_PICTURE_UPLOAD_FAILED


class PictureDownloadFailedError(S3Error):
    """Raised when a picture binary cannot be read."""

    default_error_code = ERROR_CODE_PICTURE_DOWNLOAD_FAILED


class PictureDeletionFailedError(S3Error):
    """Raised when a picture binary cannot be deleted."""

    default_error_code = ERROR_CODE_PICTURE_DELETION_FAILED
