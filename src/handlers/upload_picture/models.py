"""Pydantic models for picture upload request/response."""

import base64
import binascii

from aws_lambda_powertools import Logger
from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from core.models.picture import PictureInfo
from core.utils.constants import ALLOWED_MIME_TYPES

logger = Logger(UTC=True)


class PictureUploadRequest(BaseModel):
    """Validation model for picture upload request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file: str = Field(..., description="Base64 encoded picture file")
    mime_type: str | None = Field(
        None,
        description="Declared MIME type; detected from the file when omitted",
    )
    seo_filename: str | None = Field(
        None,
        max_length=400,
        description="Display name the SEO filename is derived from",
    )
    is_new: StrictBool = Field(True, description="Thumbnails must be (re)generated")
    product_id: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Product to attach the picture to",
    )
    display_order: int = Field(0, ge=0, description="Position within the product gallery")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str) -> str:
        """
        Validate base64 file:
        - must not be empty
        - must decode correctly
        - must have non-zero size

        Byte size and dimension limits are enforced by the picture service.
        """
        if not value:
            raise ValueError("file must not be empty")

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.error(f"File validation error: Invalid base64 - {e}")
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            logger.error("File validation error: Decoded file is empty")
            raise ValueError("Decoded file is empty")

        return value

    @field_validator("mime_type")
    @classmethod
    def validate_mime_type(cls, value: str | None) -> str | None:
        if not value:
            return None

        mime_type = value.lower()
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValueError(
                f"Invalid MIME type '{value}'. "
                f"Allowed types: {', '.join(sorted(ALLOWED_MIME_TYPES))}"
            )
        return mime_type


class PictureUploadResponse(BaseModel):
    """Response model for successful picture upload."""

    picture: PictureInfo = Field(..., description="Stored picture")
    product_id: str | None = Field(None, description="Product the picture was attached to")
    message: str = Field(..., description="Success message")
