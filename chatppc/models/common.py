"""
Common response models and utilities.

Error schema, acknowledgement wrapper and page metadata shared by the
chat and admin APIs.

Dependencies: pydantic
System role: Common API response structures
"""

import math

from pydantic import BaseModel, Field

MAX_PAGE_LIMIT = 100


class ErrorResponse(BaseModel):
    """Error response schema."""

    success: bool = False
    error: str = Field(description="Error message")
    details: dict | None = Field(default=None, description="Additional error context")


class SuccessResponse(BaseModel):
    """Plain acknowledgement."""

    success: bool = True
    message: str | None = None


class Pagination(BaseModel):
    """Page metadata returned with every paginated admin listing."""

    page: int
    limit: int
    total: int
    pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        """Compute page count for total items at limit items per page."""
        return cls(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


def clamp_page(page: int) -> int:
    """Pages start at 1."""
    return max(1, page)


def clamp_limit(limit: int, maximum: int = MAX_PAGE_LIMIT) -> int:
    """Keep a page size within 1..maximum."""
    return min(maximum, max(1, limit))
