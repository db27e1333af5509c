from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)

from core.models.picture import PictureInfo, PictureType
from core.utils.settings import MediaSettings


class GetPictureRequest(BaseModel):
    """Validation model for get picture request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    picture_id: StrictStr = Field(
        ...,
        min_length=1,
        description="Picture ID to resolve",
    )

    target_size: int = Field(
        default=0,
        ge=0,
        description=(
            "Longest side of the requested thumbnail; 0 keeps the original size. "
            "Bounded by the MAXIMUM_IMAGE_SIZE setting."
        ),
    )

    store_location: str | None = Field(
        default=None,
        description="Base URL of the storefront, ending with '/'",
    )

    show_default: StrictBool = Field(
        default=True,
        description="Fall back to the default picture when the picture is missing",
    )

    default_type: PictureType = Field(
        default=PictureType.ENTITY,
        description="Picture type selecting the default picture",
    )

    metadata: StrictBool = Field(
        default=False,
        description="Include picture metadata in the response",
    )

    download: StrictBool = Field(
        default=False,
        description=(
            "If true, returns the picture binary "
            "(Content-Disposition: attachment) instead of its URL."
        ),
    )

    @field_validator("default_type", mode="before")
    @classmethod
    def parse_default_type(cls, value: Any) -> Any:
        """Accept picture type names ("entity", "avatar") as well as values."""
        if isinstance(value, str):
            name = value.strip()
            if name.isdigit():
                return int(name)
            try:
                return PictureType[name.upper()]
            except KeyError as exc:
                raise ValueError(f"Invalid picture type '{value}'") from exc
        return value

    @field_validator("target_size")
    @classmethod
    def validate_target_size(cls, value: int) -> int:
        maximum_image_size = MediaSettings.from_env().maximum_image_size
        if value > maximum_image_size:
            raise ValueError(f"target_size must not exceed {maximum_image_size}")
        return value

    @field_validator("store_location")
    @classmethod
    def validate_store_location(cls, value: str | None) -> str | None:
        if not value:
            return None
        if not value.startswith(("http://", "https://")):
            raise ValueError("store_location must be an absolute http(s) URL")
        return value


class GetPictureResponse(BaseModel):
    """Resolved picture URL."""

    picture_id: str
    target_size: int
    url: str
    metadata: PictureInfo | None = None
