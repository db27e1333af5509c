"""Media settings resolved from the Lambda environment."""

import os

from pydantic import BaseModel, Field

from core.utils.constants import (
    DEFAULT_IMAGE_QUALITY,
    DEFAULT_STORE_LOCATION,
    ENV_DEFAULT_IMAGE_QUALITY,
    ENV_MAX_FILE_SIZE,
    ENV_MAXIMUM_IMAGE_SIZE,
    ENV_PICTURE_STORE_IN_DB,
    ENV_STORE_LOCATION,
    MAX_FILE_SIZE,
    MAXIMUM_IMAGE_SIZE,
)

_TRUTHY = {"1", "true", "yes", "on"}


class MediaSettings(BaseModel):
    """Settings controlling picture storage, validation and URL generation."""

    store_in_db: bool = Field(False, description="Store picture binaries in the picture table")
    maximum_image_size: int = Field(MAXIMUM_IMAGE_SIZE, ge=1, description="Max longest side in pixels")
    max_file_size: int = Field(MAX_FILE_SIZE, ge=1, description="Max picture binary size in bytes")
    default_image_quality: int = Field(DEFAULT_IMAGE_QUALITY, ge=1, le=100)
    store_location: str = Field(DEFAULT_STORE_LOCATION, min_length=1)

    @classmethod
    def from_env(cls) -> "MediaSettings":
        """Build settings from environment variables, falling back to defaults."""
        return cls(
            store_in_db=os.getenv(ENV_PICTURE_STORE_IN_DB, "false").strip().lower() in _TRUTHY,
            maximum_image_size=int(os.getenv(ENV_MAXIMUM_IMAGE_SIZE) or MAXIMUM_IMAGE_SIZE),
            max_file_size=int(os.getenv(ENV_MAX_FILE_SIZE) or MAX_FILE_SIZE),
            default_image_quality=int(os.getenv(ENV_DEFAULT_IMAGE_QUALITY) or DEFAULT_IMAGE_QUALITY),
            store_location=os.getenv(ENV_STORE_LOCATION) or DEFAULT_STORE_LOCATION,
        )
