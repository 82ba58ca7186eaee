"""Pagination envelope shared by list endpoints."""

import math
from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PaginationMeta(BaseModel):
    """Pagination metadata derived from page, limit and total."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationMeta":
        total_pages = math.ceil(total / limit)
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class PaginatedResponse(BaseModel, Generic[T]):
    """A page of items plus its metadata."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    data: List[T]
    meta: PaginationMeta

    @classmethod
    def create(cls, data: List[T], page: int, limit: int, total: int) -> "PaginatedResponse[T]":
        return cls(data=data, meta=PaginationMeta.build(page, limit, total))
