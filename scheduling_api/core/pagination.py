"""
Page envelopes for list endpoints.

    GET /courses?page=2&page_size=20  →  Page[CourseOut]

Page numbers are 1-based. Links to neighbouring pages are produced by a
caller-supplied `path_builder(page_number) -> str` so each resource keeps its
own filters in the URLs it hands out.
"""
from __future__ import annotations

import math
from typing import Callable, Generic, Optional, Sequence, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    page: int = Field(default=1, ge=1, description="The page number to retrieve (default: 1)")
    page_size: int = Field(default=20, ge=1, description="The number of items per page (default: 20)")


class PageLinks(BaseModel):
    first_page: str
    last_page: str
    next: Optional[str] = None
    prev: Optional[str] = None


class Page(BaseModel, Generic[T]):
    data: list[T]
    quantity: int = Field(description="Items on this page.")
    total: int = Field(description="Items across all pages.")
    links: PageLinks


def skip_take(query: PaginationQuery) -> tuple[int, int]:
    """Offset / limit for the data-access layer."""
    return (query.page - 1) * query.page_size, query.page_size


def total_pages(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be at least 1.")
    return math.ceil(total / page_size)


def paginate(
    items: Sequence[T],
    total: int,
    query: PaginationQuery,
    path_builder: Callable[[int], str],
) -> Page[T]:
    page = query.page
    pages = total_pages(total, query.page_size)
    # an empty collection still has a first (and last) page
    last = max(pages, 1)
    return Page(
        data=list(items),
        quantity=len(items),
        total=total,
        links=PageLinks(
            first_page=path_builder(1),
            last_page=path_builder(last),
            next=path_builder(page + 1) if page < pages else None,
            prev=path_builder(page - 1) if page > 1 else None,
        ),
    )


def list_path(base: str, page: int, page_size: int, **filters: object) -> str:
    """`/courses?institute_id=3&page=2&page_size=20`; None filters are dropped."""
    params = {key: value for key, value in filters.items() if value is not None}
    params["page"] = page
    params["page_size"] = page_size
    return f"{base}?{urlencode(params)}"
