"""
Pagination and sort helpers for list endpoints.
"""

from __future__ import annotations

import math
from typing import Any, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from taskboard.core.exceptions import ValidationError
from taskboard.schemas.common import Pagination


def parse_sort(
    sort: str,
    columns: dict[str, InstrumentedAttribute[Any]],
) -> list[Any]:
    """
    Turn a sort expression into ORDER BY clauses.

    ``"-createdAt"`` sorts descending, ``"name"`` ascending; several keys may
    be comma separated (``"status,-dueDate"``).
    """
    clauses: list[Any] = []
    for raw in sort.split(","):
        key = raw.strip()
        if not key:
            continue
        descending = key.startswith("-")
        name = key.lstrip("-+")
        column = columns.get(name)
        if column is None:
            raise ValidationError(
                f"Invalid sort field '{name}'. Allowed: {', '.join(sorted(columns))}",
                code="INVALID_SORT",
            )
        clauses.append(column.desc() if descending else column.asc())
    if not clauses:
        raise ValidationError("Sort expression is empty", code="INVALID_SORT")
    return clauses


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


async def paginate(
    db: AsyncSession,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
    order_by: Sequence[Any],
) -> tuple[list[Any], Pagination]:
    """Run a count and one page of ``stmt``. Pages past the end come back empty."""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()
    pagination = Pagination(
        page=page,
        limit=limit,
        total=total,
        pages=page_count(total, limit),
    )

    offset = (page - 1) * limit
    # Offsets past the end may exceed the driver's integer range
    if offset >= total:
        return [], pagination

    result = await db.execute(stmt.order_by(*order_by).offset(offset).limit(limit))
    return list(result.scalars().all()), pagination
