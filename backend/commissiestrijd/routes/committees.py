from __future__ import annotations
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from commissiestrijd.auth_deps import get_principal, require_admin
from commissiestrijd.db import get_session
from commissiestrijd.schemas.catalog import CommitteePublic, CommitteeCreate, CommitteeRename
from commissiestrijd.services import committees as svc

router = APIRouter(prefix="/committees", tags=["committees"])

@router.get("", response_model=list[CommitteePublic])
async def list_committees(session: AsyncSession = Depends(get_session), principal=Depends(get_principal)):
    return [CommitteePublic.model_validate(c) for c in await svc.list_committees(session)]

@router.post("", response_model=CommitteePublic, status_code=201)
async def create_committee(payload: CommitteeCreate, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    return CommitteePublic.model_validate(await svc.create_committee(session, payload.name))

@router.delete("/{name}", status_code=204)
async def delete_committee(name: str, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)):
    await svc.delete_committee(session, name)
    return Response(status_code=204)

@router.put("/{name}/rename", response_model=CommitteePublic)
async def rename_committee(
    name: str, payload: CommitteeRename, session: AsyncSession = Depends(get_session), admin=Depends(require_admin)
):
    return CommitteePublic.model_validate(await svc.rename_committee(session, name, payload.new_name))
