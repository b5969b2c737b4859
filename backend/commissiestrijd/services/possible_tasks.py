from __future__ import annotations
import uuid
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput, NotFound, AlreadyExists
from commissiestrijd.models.possible_task import PossibleTask
from commissiestrijd.services.lifecycle import check_points, check_max_per_period

log = structlog.get_logger()

MAX_DESCRIPTION = 500
MAX_SHORT_DESCRIPTION = 50


def _texts(description: str | None, short_description: str | None) -> tuple[str, str]:
    description = (description or "").strip()
    short_description = (short_description or "").strip()
    if not description:
        raise InvalidInput("Description cannot be empty.")
    if not short_description:
        raise InvalidInput("Short description cannot be empty.")
    if len(description) > MAX_DESCRIPTION:
        raise InvalidInput(f"Description cannot exceed {MAX_DESCRIPTION} characters.")
    if len(short_description) > MAX_SHORT_DESCRIPTION:
        raise InvalidInput(f"Short description cannot exceed {MAX_SHORT_DESCRIPTION} characters.")
    return description, short_description


async def _description_taken(session: AsyncSession, description: str, exclude: uuid.UUID | None = None) -> bool:
    q = select(PossibleTask.id).where(PossibleTask.description == description)
    if exclude is not None:
        q = q.where(PossibleTask.id != exclude)
    return (await session.scalar(q)) is not None


async def list_possible_tasks(session: AsyncSession, active_only: bool = False) -> list[PossibleTask]:
    q = select(PossibleTask).order_by(PossibleTask.short_description)
    if active_only:
        q = q.where(PossibleTask.is_active.is_(True))
    return list((await session.execute(q)).scalars().all())


async def get_possible_task(session: AsyncSession, task_id: uuid.UUID) -> PossibleTask:
    t = await session.get(PossibleTask, task_id)
    if not t:
        raise NotFound("Task not found.")
    return t


async def create_possible_task(
    session: AsyncSession,
    *,
    description: str | None,
    short_description: str | None,
    points: int,
    max_per_period: int | None = None,
) -> PossibleTask:
    description, short_description = _texts(description, short_description)
    check_points(points)
    check_max_per_period(max_per_period)
    if await _description_taken(session, description):
        raise AlreadyExists("A task with this description already exists.")
    t = PossibleTask(
        id=uuid.uuid4(),
        description=description,
        short_description=short_description,
        points=points,
        is_active=True,
        max_per_period=max_per_period,
    )
    session.add(t)
    await session.commit()
    log.info("possible_task_created", possible_task_id=str(t.id), points=points)
    return t


async def edit_possible_task(
    session: AsyncSession,
    task_id: uuid.UUID,
    *,
    description: str | None,
    short_description: str | None,
    points: int,
    is_active: bool,
    max_per_period: int | None = None,
) -> PossibleTask:
    description, short_description = _texts(description, short_description)
    check_points(points)
    check_max_per_period(max_per_period)
    t = await get_possible_task(session, task_id)
    if await _description_taken(session, description, exclude=t.id):
        raise AlreadyExists("A task with this description already exists.")
    t.description = description
    t.short_description = short_description
    t.points = points
    t.is_active = is_active
    t.max_per_period = max_per_period
    await session.commit()
    log.info("possible_task_edited", possible_task_id=str(t.id))
    return t


async def set_possible_task_state(session: AsyncSession, task_id: uuid.UUID, active: bool) -> PossibleTask:
    t = await get_possible_task(session, task_id)
    t.is_active = active
    await session.commit()
    log.info("possible_task_state_set", possible_task_id=str(t.id), active=active)
    return t
