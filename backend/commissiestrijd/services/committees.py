from __future__ import annotations
import structlog
from sqlalchemy import select, update, exists
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput, NotFound, AlreadyExists, InUse
from commissiestrijd.models.committee import Committee
from commissiestrijd.models.submitted_task import SubmittedTask

log = structlog.get_logger()


async def list_committees(session: AsyncSession) -> list[Committee]:
    return list((await session.execute(select(Committee).order_by(Committee.name))).scalars().all())


async def create_committee(session: AsyncSession, name: str | None) -> Committee:
    name = (name or "").strip()
    if not name:
        raise InvalidInput("Name cannot be empty.")
    if await session.get(Committee, name):
        raise AlreadyExists("Committee with this name already exists.")
    c = Committee(name=name)
    session.add(c)
    await session.commit()
    log.info("committee_created", committee=name)
    return c


async def delete_committee(session: AsyncSession, name: str) -> None:
    c = await session.get(Committee, name)
    if not c:
        raise NotFound("Committee not found.")
    has_submissions = await session.scalar(select(exists().where(SubmittedTask.committee == name)))
    if has_submissions:
        raise InUse("Committee has submitted tasks and cannot be deleted.")
    await session.delete(c)
    await session.commit()
    log.info("committee_deleted", committee=name)


async def rename_committee(session: AsyncSession, name: str, new_name: str | None) -> Committee:
    """Replace the committee row and move every submission to the new name in one transaction."""
    name = (name or "").strip()
    new_name = (new_name or "").strip()
    if not new_name:
        raise InvalidInput("New name cannot be empty.")
    old = await session.get(Committee, name)
    if not old:
        raise NotFound("Committee not found.")
    if await session.get(Committee, new_name):
        raise AlreadyExists("Committee with this new name already exists.")

    try:
        renamed = Committee(name=new_name)
        session.add(renamed)
        await session.flush()
        await session.execute(
            update(SubmittedTask)
            .where(SubmittedTask.committee == name)
            .values(committee=new_name)
            .execution_options(synchronize_session="fetch")
        )
        await session.delete(old)
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    log.info("committee_renamed", committee=name, new_name=new_name)
    return renamed
