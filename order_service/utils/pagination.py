"""
In-memory pagination helpers
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, TypeVar

T = TypeVar("T")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class PaginatedResult(Generic[T]):
    """One page of items plus the metadata describing where it sits"""
    data: list[T]
    current_page: int
    total_pages: int
    total_items: int


def _at_least_one(value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, number)


def paginate(items: Sequence[T], page: Any, limit: Any) -> PaginatedResult[T]:
    """Slice ``items`` into the requested page.

    ``page`` and ``limit`` below 1 (or not numeric at all) are treated as 1.
    A page past the end of the data comes back empty, with the same metadata.
    """
    valid_page = _at_least_one(page)
    valid_limit = _at_least_one(limit)

    total_items = len(items)
    total_pages = math.ceil(total_items / valid_limit)

    start = (valid_page - 1) * valid_limit
    end = start + valid_limit

    return PaginatedResult(
        data=list(items[start:end]),
        current_page=valid_page,
        total_pages=total_pages,
        total_items=total_items,
    )


def parse_int(raw: Optional[str], default: int) -> int:
    """Read a query-string integer the lenient way: ``"2abc"`` is 2, ``"abc"`` is the default"""
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    return int(match.group(1))
