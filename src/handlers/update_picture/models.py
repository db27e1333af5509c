"""Pydantic models for picture update request/response."""

import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator, model_validator

from core.models.picture import PictureInfo
from core.utils.constants import ALLOWED_MIME_TYPES


class UpdatePictureRequest(BaseModel):
    """Validation model for picture update request.

    Either a new binary, a new SEO filename, or both must be given.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    picture_id: StrictStr = Field(..., min_length=1, description="Picture ID to update")
    file: str | None = Field(None, description="Base64 encoded replacement picture")
    mime_type: str | None = Field(None, description="Declared MIME type of the replacement")
    seo_filename: str | None = Field(
        None,
        max_length=400,
        description="Display name the SEO filename is derived from",
    )
    is_new: StrictBool = Field(True, description="Thumbnails must be regenerated")

    @field_validator("file")
    @classmethod
    def validate_file(cls, value: str | None) -> str | None:
        if value is None:
            return None

        try:
            file_data = base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("Invalid base64 encoded file") from e

        if not file_data:
            raise ValueError("Decoded file is empty")

        return value

    @field_validator("mime_type")
    @classmethod
    def validate_mime_type(cls, value: str | None) -> str | None:
        if not value:
            return None

        mime_type = value.lower()
        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValueError(f"Invalid MIME type '{value}'")
        return mime_type

    @model_validator(mode="after")
    def validate_has_changes(self) -> "UpdatePictureRequest":
        if self.file is None and self.seo_filename is None:
            raise ValueError("Either file or seo_filename must be provided")
        return self


class UpdatePictureResponse(BaseModel):
    """Response model for successful picture update."""

    picture: PictureInfo
    message: str
