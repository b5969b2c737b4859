from __future__ import annotations
from math import ceil
from typing import Any
from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput


def page_amount(total: int, page_size: int) -> int:
    return max(1, ceil(total / page_size))


async def paginate(session: AsyncSession, query: Select, page: int, page_size: int) -> tuple[list[Any], int]:
    """
    Run `query` for one page. Returns (rows, page_amount).

    An empty result still has one page, so page 1 is always accepted; any other page
    beyond page_amount is an InvalidInput.
    """
    if page < 1 or page_size < 1:
        raise InvalidInput("Invalid page number or page size.")
    total = await session.scalar(select(func.count()).select_from(query.order_by(None).subquery())) or 0
    pages = page_amount(int(total), page_size)
    if page > pages and page != 1:
        raise InvalidInput("Invalid page number.")
    rows = (await session.execute(query.offset((page - 1) * page_size).limit(page_size))).scalars().all()
    return list(rows), pages
