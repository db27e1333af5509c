"""
Pydantic models for list pictures request and response.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.models.pagination import PaginationInfo
from core.models.picture import PictureInfo
from core.utils.constants import (
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    MAX_IDS_PER_REQUEST,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
)
from core.utils.validators import split_ids


class ListPicturesRequest(BaseModel):
    """
    Validation model for list pictures API.

    Supports three mutually exclusive modes:
    - Paged listing of all pictures (page_index, page_size)
    - Pictures of a product (product_id, records)
    - Pictures by id (ids, comma-separated)
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    # Mode 1: Paged listing
    page_index: int = Field(
        default=DEFAULT_PAGE_INDEX,
        ge=0,
        description="Zero-based page index",
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        ge=MIN_PAGE_SIZE,
        le=MAX_PAGE_SIZE,
        description=f"Results per page ({MIN_PAGE_SIZE}-{MAX_PAGE_SIZE})",
    )

    # Mode 2: Product gallery
    product_id: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Return the pictures attached to this product",
    )
    records: int = Field(
        default=0,
        ge=0,
        description="Maximum number of product pictures; 0 returns all",
    )

    # Mode 3: Lookup by ids
    ids: list[str] | None = Field(
        None,
        description="Comma-separated picture ids",
    )

    @field_validator("ids", mode="before")
    @classmethod
    def parse_ids(cls, value: object) -> list[str] | None:
        if value is None or value == "":
            return None
        if isinstance(value, str):
            ids = split_ids(value)
        elif isinstance(value, list):
            ids = split_ids(",".join(str(v) for v in value))
        else:
            raise ValueError("ids must be a comma-separated string")

        if len(ids) > MAX_IDS_PER_REQUEST:
            raise ValueError(f"A maximum of {MAX_IDS_PER_REQUEST} ids is allowed")
        return ids or None

    @model_validator(mode="after")
    def validate_single_mode(self) -> "ListPicturesRequest":
        """Ensure product_id and ids are not combined."""
        if self.product_id and self.ids:
            raise ValueError("product_id and ids cannot be combined")
        return self


class ListPicturesResponse(BaseModel):
    """Response model for list pictures API."""

    pictures: list[PictureInfo]
    total_count: int
    returned_count: int
    pagination: PaginationInfo | None = None
