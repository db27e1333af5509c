"""
Page-based pagination utilities.
"""

from typing import TypeVar

from core.models.pagination import PagedList
from core.utils.constants import (
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
)

ItemT = TypeVar("ItemT")


class OffsetPagination:
    """
    Page-based pagination helper over in-memory result sets.

    Typical usage:
    1. Validate page index and page size
    2. Slice an ordered list of items into a PagedList
    """

    @staticmethod
    def paginate(
        items: list[ItemT],
        page_index: int = DEFAULT_PAGE_INDEX,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedList[ItemT]:
        """
        Return the page at `page_index` of an ordered list.

        The offset is `page_index * page_size`. Pages past the end are
        empty but still report the total count.

        Example:
            items = [1, 2, 3, 4, 5]
            paginate(items, page_index=1, page_size=2)

            → PagedList(items=[3, 4], page_index=1, page_size=2, total_count=5)
        """
        offset = page_index * page_size

        return PagedList(
            items=items[offset : offset + page_size],
            page_index=page_index,
            page_size=page_size,
            total_count=len(items),
        )

    @staticmethod
    def validate(page_index: int, page_size: int) -> tuple[bool, str]:
        """
        Validate pagination parameters.

        Validation rules:
        - page_size must be within [MIN_PAGE_SIZE, MAX_PAGE_SIZE]
        - page_index must be zero or positive

        Example:
            validate(page_index=0, page_size=20)
            → (True, "")
        """
        if page_size < MIN_PAGE_SIZE:
            return False, f"Page size must be at least {MIN_PAGE_SIZE}"

        if page_size > MAX_PAGE_SIZE:
            return False, f"Page size must not exceed {MAX_PAGE_SIZE}"

        if page_index < 0:
            return False, "Page index must be zero or a positive integer"

        return True, ""
