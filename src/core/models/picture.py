"""Shared picture domain models."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from core.utils.constants import MIME_TYPE_EXTENSION_MAP


class PictureType(IntEnum):
    """Kind of entity a picture belongs to; selects the default picture."""

    ENTITY = 1
    AVATAR = 10


DEFAULT_PICTURE_FILES: dict[PictureType, str] = {
    PictureType.ENTITY: "default-image.gif",
    PictureType.AVATAR: "default-avatar.jpg",
}


class PictureSize(BaseModel):
    """Pixel dimensions of a picture."""

    model_config = ConfigDict(frozen=True)

    width: StrictInt = Field(..., ge=0)
    height: StrictInt = Field(..., ge=0)

    @property
    def longest_side(self) -> int:
        return max(self.width, self.height)


class Picture(BaseModel):
    """Picture record as persisted in the picture table."""

    model_config = ConfigDict(validate_assignment=True)

    picture_id: StrictStr = Field(..., description="Unique picture identifier")
    mime_type: StrictStr = Field(..., description="MIME type of the picture (e.g. image/jpeg)")
    seo_filename: StrictStr | None = Field(None, description="SEO friendly filename used in URLs")

    is_new: StrictBool = Field(False, description="Thumbnails must be regenerated")
    is_transient: StrictBool = Field(True, description="Not yet attached to an owning entity")

    storage_key: StrictStr | None = Field(None, description="Object storage key of the binary")
    picture_binary: bytes | None = Field(
        None,
        description="Binary picture data when pictures are stored in the database",
        repr=False,
    )

    file_size: StrictInt = Field(0, description="Picture size in bytes")
    file_hash: StrictStr | None = Field(None, description="SHA-256 of the picture binary")
    width: StrictInt | None = None
    height: StrictInt | None = None

    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    @property
    def extension(self) -> str:
        """Primary file extension for the picture's MIME type."""
        extensions = MIME_TYPE_EXTENSION_MAP.get(self.mime_type.lower())
        if extensions:
            return extensions[0]
        # e.g. "image/x-icon" -> "x-icon"
        return self.mime_type.rsplit("/", 1)[-1] or "bin"

    @property
    def size(self) -> PictureSize | None:
        if self.width is None or self.height is None:
            return None
        return PictureSize(width=self.width, height=self.height)


class PictureInfo(BaseModel):
    """Picture metadata returned by the Picture API (no binary)."""

    picture_id: StrictStr
    mime_type: StrictStr
    seo_filename: StrictStr | None = None
    is_new: StrictBool
    is_transient: StrictBool
    file_size: StrictInt
    width: StrictInt | None = None
    height: StrictInt | None = None
    created_at: StrictStr
    updated_at: StrictStr | None = None

    @classmethod
    def from_picture(cls, picture: Picture) -> "PictureInfo":
        return cls.model_validate(picture.model_dump(exclude={"picture_binary", "storage_key", "file_hash"}))


class ProductPicture(BaseModel):
    """Mapping of a picture to a product."""

    product_id: StrictStr = Field(..., description="Owning product identifier")
    picture_id: StrictStr = Field(..., description="Mapped picture identifier")
    display_order: StrictInt = Field(0, description="Sort position within the product gallery")
