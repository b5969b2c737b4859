from __future__ import annotations
import uuid
from typing import Literal
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput, NotFound, PolicyViolation
from commissiestrijd.models.committee import Committee
from commissiestrijd.models.possible_task import PossibleTask
from commissiestrijd.models.submitted_task import SubmittedTask, TaskStatus
from commissiestrijd.services import lifecycle
from commissiestrijd.services.clock import Clock
from commissiestrijd.services.media import ALLOWED_EXTENSIONS, extension_of, mime_for_name, sniff_format
from commissiestrijd.services.paging import paginate
from commissiestrijd.services.storage import ImageStore

log = structlog.get_logger()

StatusFilter = Literal["pending", "approved", "rejected", "all"]
STATUS_FILTERS = ("pending", "approved", "rejected", "all")

DEFAULT_MAX_IMAGE_BYTES = 5 * 1024 * 1024


def parse_id(raw: str | uuid.UUID | None, what: str = "Task ID") -> uuid.UUID:
    if isinstance(raw, uuid.UUID):
        return raw
    raw = (raw or "").strip()
    if not raw:
        raise InvalidInput(f"{what} cannot be empty.")
    try:
        value = uuid.UUID(raw)
    except ValueError:
        raise InvalidInput(f"{what} is not a valid id.")
    if value.int == 0:
        raise InvalidInput(f"{what} cannot be empty.")
    return value


async def submit_task(
    session: AsyncSession,
    store: ImageStore,
    clock: Clock,
    *,
    task_id: str | uuid.UUID | None,
    committee: str | None,
    filename: str | None,
    data: bytes | None,
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
) -> SubmittedTask:
    """Create a Pending submission; the first failed check is raised."""
    tid = parse_id(task_id)
    committee_name = (committee or "").strip()
    if not committee_name:
        raise InvalidInput("Committee cannot be empty.")
    if not data:
        raise InvalidInput("Image file is required.")

    c = await session.get(Committee, committee_name)
    if not c:
        raise NotFound("Committee not found.")

    ext = extension_of(filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise PolicyViolation("Invalid image file type. Allowed types are: " + ", ".join(ALLOWED_EXTENSIONS))
    if len(data) > max_image_bytes:
        raise PolicyViolation(f"Image file size exceeds the maximum limit of {max_image_bytes // (1024 * 1024)} MB.")

    task = await session.get(PossibleTask, tid)
    if not task:
        raise NotFound("Task not found.")
    if not task.is_active:
        raise PolicyViolation("Task is not active.")

    if sniff_format(data) is None:
        raise PolicyViolation("Image file is not a valid image.")

    key = f"{uuid.uuid4().hex}{ext}"
    store.put(key, data, mime_for_name(key))

    sub = SubmittedTask(
        id=uuid.uuid4(),
        possible_task_id=task.id,
        committee=c.name,
        submitted_at=clock.local_now_as_utc(),
        image_path=key,
        status=TaskStatus.PENDING,
        points=task.points,
        max_per_period=task.max_per_period,
    )
    session.add(sub)
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        # no row references the image; drop it again
        try:
            store.delete(key)
        except Exception:
            log.exception("submitted_image_cleanup_failed", image_path=key)
        raise
    log.info("task_submitted", submitted_task_id=str(sub.id), possible_task_id=str(task.id), committee=c.name)
    return sub


async def get_submitted_task(session: AsyncSession, submitted_task_id: str | uuid.UUID) -> SubmittedTask:
    sub = await session.get(SubmittedTask, parse_id(submitted_task_id))
    if not sub:
        raise NotFound("Submitted task not found.")
    return sub


async def approve_task(
    session: AsyncSession, submitted_task_id: str | uuid.UUID, points: int, max_per_period: int | None = None
) -> SubmittedTask:
    sub = await get_submitted_task(session, submitted_task_id)
    lifecycle.approve(sub, points, max_per_period)
    await session.commit()
    log.info("task_approved", submitted_task_id=str(sub.id), points=points, max_per_period=max_per_period)
    return sub


async def reject_task(session: AsyncSession, submitted_task_id: str | uuid.UUID, reason: str | None) -> SubmittedTask:
    sub = await get_submitted_task(session, submitted_task_id)
    lifecycle.reject(sub, reason)
    await session.commit()
    log.info("task_rejected", submitted_task_id=str(sub.id))
    return sub


async def list_submitted_tasks(
    session: AsyncSession,
    *,
    status: StatusFilter = "all",
    committee: str | None = None,
    page: int = 1,
    page_size: int = 5,
) -> tuple[list[SubmittedTask], int]:
    if status not in STATUS_FILTERS:
        raise InvalidInput("Status must be one of: " + ", ".join(STATUS_FILTERS))
    q = select(SubmittedTask)
    if status != "all":
        q = q.where(SubmittedTask.status == TaskStatus(status))
    if committee:
        q = q.where(SubmittedTask.committee == committee)
    q = q.order_by(SubmittedTask.submitted_at.desc(), SubmittedTask.id)
    rows, pages = await paginate(session, q, page, page_size)
    log.info("submitted_tasks_listed", status=status, committee=committee, page=page, count=len(rows))
    return rows, pages
