from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapped around every API response."""
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    error: Optional[str] = None


class Page(BaseModel, Generic[T]):
    """Schema for a paginated list response."""
    data: list[T]
    total: int
    page: int
    limit: int
    total_pages: int


def to_page(result, schema) -> Page:
    """Build a response page from a repository PageResult, validating each row with schema."""
    return Page[schema](
        data=[schema.model_validate(item) for item in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )
