from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from commissiestrijd.auth_deps import get_principal, require_admin
from commissiestrijd.db import get_session
from commissiestrijd.schemas.catalog import PossibleTaskPublic, PossibleTaskCreate, PossibleTaskEdit
from commissiestrijd.services import possible_tasks as svc

router = APIRouter(prefix="/possible-tasks", tags=["possible-tasks"])

@router.get("", response_model=list[PossibleTaskPublic])
async def list_possible_tasks(session: AsyncSession = Depends(get_session), principal=Depends(get_principal)):
    return [PossibleTaskPublic.model_validate(t) for t in await svc.list_possible_tasks(session)]

@router.get("/active", response_model=list[PossibleTaskPublic])
async def list_active_possible_tasks(session: AsyncSession = Depends(get_session), principal=Depends(get_principal)):
    return [PossibleTaskPublic.model_validate(t) for t in await svc.list_possible_tasks(session, active_only=True)]

@router.get("/{task_id}", response_model=PossibleTaskPublic)
async def get_possible_task(task_id: UUID, session: AsyncSession = Depends(get_session), principal=Depends(get_principal)):
    return PossibleTaskPublic.model_validate(await svc.get_possible_task(session, task_id))

@router.post("", response_model=PossibleTaskPublic, status_code=201)
async def create_possible_task(payload: PossibleTaskCreate, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    t = await svc.create_possible_task(
        session,
        description=payload.description,
        short_description=payload.short_description,
        points=payload.points,
        max_per_period=payload.max_per_period,
    )
    return PossibleTaskPublic.model_validate(t)

@router.put("/{task_id}", response_model=PossibleTaskPublic)
async def edit_possible_task(
    task_id: UUID, payload: PossibleTaskEdit, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)
):
    t = await svc.edit_possible_task(
        session,
        task_id,
        description=payload.description,
        short_description=payload.short_description,
        points=payload.points,
        is_active=payload.is_active,
        max_per_period=payload.max_per_period,
    )
    return PossibleTaskPublic.model_validate(t)

@router.put("/{task_id}/state", status_code=204)
async def set_possible_task_state(
    task_id: UUID,
    active: bool = Query(...),
    session: AsyncSession = Depends(get_session),
    admin=Depends(require_admin),
):
    await svc.set_possible_task_state(session, task_id, active)
    return Response(status_code=204)
