from __future__ import annotations
from uuid import UUID
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from commissiestrijd.auth_deps import get_principal, require_admin
from commissiestrijd.db import get_session
from commissiestrijd.deps import get_clock
from commissiestrijd.schemas.catalog import PeriodPublic, PeriodWrite
from commissiestrijd.services.clock import Clock
from commissiestrijd.services import periods as svc

router = APIRouter(prefix="/periods", tags=["periods"])

@router.get("", response_model=list[PeriodPublic])
async def list_periods(
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
    principal=Depends(get_principal),
):
    # future first, then running, then finished
    return [PeriodPublic.model_validate(p) for p in await svc.list_periods(session, clock.local_today())]

@router.get("/{period_id}", response_model=PeriodPublic)
async def get_period(period_id: UUID, session: AsyncSession = Depends(get_session), principal=Depends(get_principal)):
    return PeriodPublic.model_validate(await svc.get_period(session, period_id))

@router.post("", response_model=PeriodPublic, status_code=201)
async def create_period(payload: PeriodWrite, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    p = await svc.create_period(session, payload.name, payload.start_date, payload.end_date)
    return PeriodPublic.model_validate(p)

@router.put("/{period_id}", response_model=PeriodPublic)
async def update_period(
    period_id: UUID, payload: PeriodWrite, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)
):
    p = await svc.update_period(session, period_id, payload.name, payload.start_date, payload.end_date)
    return PeriodPublic.model_validate(p)

@router.delete("/{period_id}", status_code=204)
async def delete_period(period_id: UUID, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    await svc.delete_period(session, period_id)
    return Response(status_code=204)
