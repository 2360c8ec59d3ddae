"""Shared response models and pagination helpers."""

from math import ceil
from typing import TypedDict
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PageInfo(TypedDict):
    current_page: int
    total_pages: int
    has_next_page: bool
    has_prev_page: bool


def build_pagination(page: int, limit: int, total: int) -> PageInfo:
    """
    Compute the pagination envelope for one page of results.

    Args:
        page: 1-based page number that was requested
        limit: Page size
        total: Number of matching records across all pages

    Returns:
        PageInfo: Current page, page count and next/prev flags
    """
    total_pages = ceil(total / limit) if limit > 0 else 0
    return PageInfo(
        current_page=page,
        total_pages=total_pages,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


class Pagination(BaseModel):
    """Pagination metadata returned alongside a page of results."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    has_next_page: bool = Field(alias="hasNextPage")
    has_prev_page: bool = Field(alias="hasPrevPage")


class OwnerResponse(BaseModel):
    """Public identity of a blog owner or comment author."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    email: str


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: str = "OK"
    message: str = "Server is running"
    timestamp: str
