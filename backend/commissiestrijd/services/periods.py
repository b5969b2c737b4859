from __future__ import annotations
import uuid
from datetime import date
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput, NotFound, AlreadyExists
from commissiestrijd.models.period import Period

log = structlog.get_logger()

MAX_NAME_LENGTH = 50


def _length(p: Period) -> int:
    return (p.end_date - p.start_date).days


def order_periods(periods: list[Period], today: date) -> list[Period]:
    """Future periods first (soonest first), then current, then past (most recent first); longer wins ties."""
    future = sorted((p for p in periods if p.start_date > today), key=lambda p: (p.start_date, -_length(p)))
    current = sorted((p for p in periods if p.start_date <= today <= p.end_date), key=lambda p: -_length(p))
    past = sorted((p for p in periods if p.end_date < today), key=lambda p: (-p.end_date.toordinal(), -_length(p)))
    return future + current + past


def _validate(name: str | None, start_date: date, end_date: date) -> str:
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Name cannot be empty.")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInput(f"Name cannot exceed {MAX_NAME_LENGTH} characters.")
    if start_date > end_date:
        raise InvalidInput("Start date must be earlier than end date.")
    return name


async def _name_taken(session: AsyncSession, name: str, exclude: uuid.UUID | None = None) -> bool:
    q = select(Period.id).where(Period.name == name)
    if exclude is not None:
        q = q.where(Period.id != exclude)
    return (await session.scalar(q)) is not None


async def list_periods(session: AsyncSession, today: date) -> list[Period]:
    rows = (await session.execute(select(Period))).scalars().all()
    return order_periods(list(rows), today)


async def get_period(session: AsyncSession, period_id: uuid.UUID) -> Period:
    p = await session.get(Period, period_id)
    if not p:
        raise NotFound("Period not found.")
    return p


async def create_period(session: AsyncSession, name: str | None, start_date: date, end_date: date) -> Period:
    name = _validate(name, start_date, end_date)
    if await _name_taken(session, name):
        raise AlreadyExists("Period with this name already exists.")
    p = Period(id=uuid.uuid4(), name=name, start_date=start_date, end_date=end_date)
    session.add(p)
    await session.commit()
    log.info("period_created", period_id=str(p.id), name=name)
    return p


async def update_period(
    session: AsyncSession, period_id: uuid.UUID, name: str | None, start_date: date, end_date: date
) -> Period:
    name = _validate(name, start_date, end_date)
    p = await get_period(session, period_id)
    if await _name_taken(session, name, exclude=p.id):
        raise AlreadyExists("Period with this name already exists.")
    p.name = name
    p.start_date = start_date
    p.end_date = end_date
    await session.commit()
    log.info("period_updated", period_id=str(p.id), name=name)
    return p


async def delete_period(session: AsyncSession, period_id: uuid.UUID) -> None:
    p = await get_period(session, period_id)
    await session.delete(p)
    await session.commit()
    log.info("period_deleted", period_id=str(period_id))
