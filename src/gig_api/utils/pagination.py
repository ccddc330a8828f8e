"""Pagination helpers."""

from typing import Any

from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class Pagination(BaseModel):
    """Normalized pagination window."""

    page: int
    page_size: int
    offset: int
    limit: int
    range_end: int


def _positive_int(value: Any) -> int | None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if number > 0 else None


def normalize_pagination(
    page: Any = None,
    page_size: Any = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> Pagination:
    """Normalize raw page/page size values (usually query strings).

    Invalid or non-positive values fall back to page 1 and the default page
    size; the page size is capped at ``max_page_size``.

    Args:
        page: Requested page number (1-based)
        page_size: Requested number of items per page
        default_page_size: Page size used when none (or an invalid one) is given
        max_page_size: Upper bound for the page size

    Returns:
        Pagination with offset/limit and the inclusive ``range_end`` index
    """
    page_number = _positive_int(page) or 1
    size = min(_positive_int(page_size) or default_page_size, max_page_size)

    offset = (page_number - 1) * size
    return Pagination(
        page=page_number,
        page_size=size,
        offset=offset,
        limit=size,
        range_end=offset + size - 1,
    )
