"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_ERROR"
ERROR_CODE_INVALID_FILTER = "FILTER_ERROR"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_IMAGE_DIMENSIONS_EXCEEDED = "IMAGE_DIMENSIONS_EXCEEDED"
ERROR_CODE_INVALID_IMAGE = "INVALID_IMAGE"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_PICTURE_NOT_FOUND = "PICTURE_NOT_FOUND"

# Storage Errors
ERROR_CODE_S3 = "S3_ERROR"
ERROR_CODE_PICTURE_UPLOAD_FAILED = "PICTURE_UPLOAD_FAILED"
ERROR_CODE_PICTURE_DOWNLOAD_FAILED = "PICTURE_DOWNLOAD_FAILED"
ERROR_CODE_PICTURE_DELETION_FAILED = "PICTURE_DELETION_FAILED"
ERROR_CODE_DUPLICATE_PICTURE = "DUPLICATE_PICTURE_ERROR"
ERROR_CODE_THUMBNAIL_FAILED = "THUMBNAIL_FAILED"

# Metadata / DynamoDB Errors
ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_UPDATE_FAILED = "METADATA_UPDATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"
ERROR_CODE_METADATA_INVALID_FORMAT = "METADATA_INVALID_FORMAT"
ERROR_CODE_MAPPING_CREATE_FAILED = "PRODUCT_PICTURE_CREATE_FAILED"
ERROR_CODE_MAPPING_DELETE_FAILED = "PRODUCT_PICTURE_DELETE_FAILED"
ERROR_CODE_MAPPING_LIST_FAILED = "PRODUCT_PICTURE_LIST_FAILED"


# ============================================================================
# Picture Constraints
# ============================================================================

MAX_FILE_SIZE = 4 * 1024 * 1024  # 4MB in bytes
MAXIMUM_IMAGE_SIZE = 1280  # longest side in pixels
DEFAULT_IMAGE_QUALITY = 90
PICTURE_ID_PREFIX = "pic_"
TRANSIENT_PICTURE_MAX_AGE_HOURS = 24


MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/bmp": ("bmp",),
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

# Pillow format names used when re-encoding thumbnails
PIL_FORMAT_BY_MIME_TYPE: Final[dict[str, str]] = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/webp": "WEBP",
    "image/bmp": "BMP",
}

# ============================================================================
# Storage Layout
# ============================================================================

PICTURE_KEY_PREFIX = "pictures"
THUMBS_KEY_PREFIX = "thumbs"
DEFAULTS_KEY_PREFIX = "defaults"
THUMBS_URL_PATH = "media/thumbs/"
DEFAULTS_URL_PATH = "media/defaults/"
DEFAULT_STORE_LOCATION = "http://localhost/"

PRODUCT_PICTURE_INDEX_NAME = "picture-product-index"

# ============================================================================
# SEO
# ============================================================================

SEO_ALLOWED_CHARS: Final[frozenset[str]] = frozenset("abcdefghijklmnopqrstuvwxyz1234567890_-")
SEO_MAX_LENGTH = 100

# ============================================================================
# Pagination Constraints
# ============================================================================

DEFAULT_PAGE_SIZE = 20
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100
DEFAULT_PAGE_INDEX = 0
MAX_IDS_PER_REQUEST = 100

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
EXPOSE_HEADERS = "Content-Type,Content-Length,X-Picture-Metadata"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_PICTURE_S3_BUCKET_NAME = "PICTURE_S3_BUCKET_NAME"
ENV_PICTURE_TABLE_NAME = "PICTURE_TABLE_NAME"
ENV_PRODUCT_PICTURE_TABLE_NAME = "PRODUCT_PICTURE_TABLE_NAME"
ENV_PICTURE_STORE_IN_DB = "PICTURE_STORE_IN_DB"
ENV_MAXIMUM_IMAGE_SIZE = "MAXIMUM_IMAGE_SIZE"
ENV_MAX_FILE_SIZE = "MAX_FILE_SIZE"
ENV_DEFAULT_IMAGE_QUALITY = "DEFAULT_IMAGE_QUALITY"
ENV_STORE_LOCATION = "STORE_LOCATION"
ENV_TRANSIENT_PICTURE_MAX_AGE_HOURS = "TRANSIENT_PICTURE_MAX_AGE_HOURS"

# ============================================================================
# Helper Functions
# ============================================================================


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted file size string
    """
    size: float = float(size_bytes)

    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024.0:
            return f"{size:.1f} {unit}"
        size /= 1024.0

    return f"{size:.1f} TB"
