import math
from dataclasses import dataclass, field
from typing import Any, List

from sqlalchemy.orm import Query


@dataclass
class PageResult:
    """One page of rows plus the numbers needed to render pagination."""
    items: List[Any] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 0


def total_pages_for(total: int, limit: int) -> int:
    """ceil(total / limit); an empty result has zero pages."""
    return math.ceil(total / limit)


def paginate(query: Query, page: int, limit: int) -> PageResult:
    """
    Run a count and a windowed fetch for an ordered query.

    Args:
        query: Ordered ORM query
        page: Page number (1-indexed)
        limit: Items per page

    Returns:
        PageResult for the requested window
    """
    total = query.count()
    offset = (page - 1) * limit
    items = query.offset(offset).limit(limit).all()

    return PageResult(
        items=items,
        total=total,
        page=page,
        limit=limit,
        total_pages=total_pages_for(total, limit),
    )
