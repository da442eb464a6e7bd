"""
Pagination Utilities.

Page-number pagination for list endpoints: page index (0-based), page size,
sort field and direction. List endpoints return a flat array unless the
caller supplies `page` or `size`.
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel

from codeboard.backend.core.exceptions import ValidationError
from codeboard.backend.schemas.base import PaginatedResponse, PaginationInfo, ResponseMetadata

T = TypeVar("T")

SORT_DIRECTIONS = frozenset({"asc", "desc"})

# Accepted spellings of sortable fields, mapped to the attribute name.
SORT_ALIASES: dict[str, str] = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "imageUrl": "image_url",
}


# =============================================================================
# Pagination Parameters
# =============================================================================


@dataclass
class PageParams:
    """
    Pagination and sorting parameters extracted from the query string.

    `paged` records whether the caller asked for a page at all.
    """

    page: int = 0
    size: int = 20
    sort_by: str = "created_at"
    sort_direction: str = "desc"
    paged: bool = False

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.sort_direction.lower() == "desc"

    def __post_init__(self) -> None:
        if self.page < 0:
            raise ValidationError("Page index must not be negative", details={"page": self.page})
        if self.size < 1:
            raise ValidationError("Page size must be at least 1", details={"size": self.size})
        if self.sort_direction.lower() not in SORT_DIRECTIONS:
            raise ValidationError(
                f"Invalid sort direction: {self.sort_direction}",
                details={"sort_direction": self.sort_direction, "allowed": sorted(SORT_DIRECTIONS)},
            )


def resolve_sort_field(sort_by: str, allowed: frozenset[str]) -> str:
    """
    Map a requested sort field to an attribute name.

    Raises:
        ValidationError: If the field is not sortable
    """
    name = SORT_ALIASES.get(sort_by, sort_by)
    if name not in allowed:
        raise ValidationError(
            f"Invalid sort field: {sort_by}",
            details={"sort_by": sort_by, "allowed": sorted(allowed)},
        )
    return name


def get_page_params(
    page: int | None = Query(
        default=None,
        ge=0,
        description="Page index (0-based). Supplying page or size returns a page.",
    ),
    size: int | None = Query(
        default=None,
        ge=1,
        description="Page size",
    ),
    sort_by: str | None = Query(
        default=None,
        description="Sort field (created_at, updated_at, title, id)",
    ),
    sort_direction: str | None = Query(
        default=None,
        description="Sort direction (asc or desc)",
    ),
) -> PageParams:
    """
    FastAPI dependency for pagination parameters.

    Defaults and the maximum page size come from application.yaml.

    Usage:
        @router.get("/items")
        async def list_items(params: PageParams = Depends(get_page_params)):
            ...
    """
    from codeboard.backend.core.config import get_app_config

    config = get_app_config().application.pagination
    if size is not None and size > config.max_page_size:
        raise ValidationError(
            f"Page size must not exceed {config.max_page_size}",
            details={"size": size, "max": config.max_page_size},
        )

    return PageParams(
        page=page if page is not None else 0,
        size=size if size is not None else config.default_page_size,
        sort_by=sort_by or config.default_sort_by,
        sort_direction=sort_direction or config.default_sort_direction,
        paged=page is not None or size is not None,
    )


# =============================================================================
# Page Container
# =============================================================================


@dataclass
class Page(Generic[T]):
    """A slice of results plus the totals needed to navigate the rest."""

    items: list[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages


def create_paginated_response(
    page: Page[Any],
    item_schema: type[BaseModel],
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Create a standardized paginated response.

    Usage:
        return create_paginated_response(
            page=notes_page,
            item_schema=NoteResponse,
            request_id=request_id,
        )
    """
    validated_items = [
        item_schema.model_validate(item).model_dump(mode="json")
        for item in page.items
    ]

    pagination = PaginationInfo(
        page=page.page,
        size=page.size,
        total_elements=page.total_elements,
        total_pages=page.total_pages,
        has_next=page.has_next,
    )

    response = PaginatedResponse(
        data=validated_items,
        pagination=pagination,
        metadata=ResponseMetadata(request_id=request_id),
    )

    return response.model_dump(mode="json")
