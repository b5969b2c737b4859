from __future__ import annotations
from fastapi import APIRouter, Depends, Form, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from commissiestrijd.auth_deps import get_principal, require_admin
from commissiestrijd.config import settings
from commissiestrijd.db import get_session
from commissiestrijd.deps import get_clock, get_image_store
from commissiestrijd.schemas.submitted_task import SubmittedTaskPublic, SubmittedTaskPage
from commissiestrijd.services.clock import Clock
from commissiestrijd.services.storage import ImageStore
from commissiestrijd.services import submissions

router = APIRouter(prefix="/submitted-tasks", tags=["submitted-tasks"])

@router.post("", response_model=SubmittedTaskPublic, status_code=201)
async def submit_task(
    task_id: str | None = Form(default=None),
    committee: str | None = Form(default=None),
    image: UploadFile | None = File(default=None, description="proof photo (.jpg, .jpeg, .png, .gif; max 5 MB)"),
    session: AsyncSession = Depends(get_session),
    store: ImageStore = Depends(get_image_store),
    clock: Clock = Depends(get_clock),
    principal=Depends(get_principal),
):
    data = await image.read() if image is not None else None
    sub = await submissions.submit_task(
        session,
        store,
        clock,
        task_id=task_id,
        committee=committee,
        filename=image.filename if image is not None else None,
        data=data,
        max_image_bytes=settings.max_image_bytes,
    )
    return SubmittedTaskPublic.model_validate(sub)

@router.get("", response_model=SubmittedTaskPage)
async def list_submitted_tasks(
    status: str = Query(default="all"),
    committee: str | None = Query(default=None),
    page: int = Query(default=1),
    page_size: int = Query(default=5),
    session: AsyncSession = Depends(get_session),
    principal=Depends(get_principal),
):
    rows, pages = await submissions.list_submitted_tasks(
        session, status=status, committee=committee, page=page, page_size=page_size
    )
    return SubmittedTaskPage(items=[SubmittedTaskPublic.model_validate(r) for r in rows], page_amount=pages)

@router.get("/{submitted_task_id}", response_model=SubmittedTaskPublic)
async def get_submitted_task(
    submitted_task_id: str,
    session: AsyncSession = Depends(get_session),
    principal=Depends(get_principal),
):
    return SubmittedTaskPublic.model_validate(await submissions.get_submitted_task(session, submitted_task_id))

@router.put("/{submitted_task_id}/approve", response_model=SubmittedTaskPublic)
async def approve_task(
    submitted_task_id: str,
    points: int = Query(...),
    max_per_period: int | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
    admin=Depends(require_admin),
):
    sub = await submissions.approve_task(session, submitted_task_id, points, max_per_period)
    return SubmittedTaskPublic.model_validate(sub)

@router.put("/{submitted_task_id}/reject", response_model=SubmittedTaskPublic)
async def reject_task(
    submitted_task_id: str,
    reason: str | None = Query(default=None),
    session: AsyncSession = Depends(get_session),
    admin=Depends(require_admin),
):
    sub = await submissions.reject_task(session, submitted_task_id, reason)
    return SubmittedTaskPublic.model_validate(sub)
