"""Pagination models."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field, StrictBool, StrictInt

ItemT = TypeVar("ItemT")


class PaginationInfo(BaseModel):
    """Pagination metadata for list responses."""

    page_index: StrictInt = Field(..., description="Zero-based index of the current page")
    page_size: StrictInt = Field(..., description="Maximum number of items per page")
    total_count: StrictInt = Field(..., description="Total number of items in the result set")
    total_pages: StrictInt = Field(..., description="Number of pages in the result set")
    has_previous_page: StrictBool = Field(..., description="Whether a page exists before this one")
    has_next_page: StrictBool = Field(..., description="Whether more items are available after this page")


class PagedList(BaseModel, Generic[ItemT]):
    """One page of a larger, ordered result set."""

    items: list[ItemT]
    page_index: StrictInt = Field(..., ge=0)
    page_size: StrictInt = Field(..., ge=1)
    total_count: StrictInt = Field(..., ge=0)

    @property
    def total_pages(self) -> int:
        return (self.total_count + self.page_size - 1) // self.page_size

    @property
    def has_previous_page(self) -> bool:
        return self.page_index > 0

    @property
    def has_next_page(self) -> bool:
        return self.page_index + 1 < self.total_pages

    def pagination_info(self) -> PaginationInfo:
        return PaginationInfo(
            page_index=self.page_index,
            page_size=self.page_size,
            total_count=self.total_count,
            total_pages=self.total_pages,
            has_previous_page=self.has_previous_page,
            has_next_page=self.has_next_page,
        )
