"""Page-based pagination shared by the paginated listings."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    page_size: int = 10
    search: str | None = None

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError("page must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass(frozen=True)
class Pagination:
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, request: PageRequest, total_count: int) -> "Pagination":
        total_pages = math.ceil(total_count / request.page_size)
        return cls(
            page=request.page,
            page_size=request.page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=request.page < total_pages,
            has_prev_page=request.page > 1,
        )
