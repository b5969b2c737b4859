from __future__ import annotations
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from commissiestrijd.auth_deps import get_principal
from commissiestrijd.db import get_session
from commissiestrijd.schemas.catalog import LeaderboardRow
from commissiestrijd.services.leaderboard import leaderboard

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

@router.get("", response_model=list[LeaderboardRow])
async def get_leaderboard(
    start_date: date = Query(...),
    end_date: date = Query(...),
    session: AsyncSession = Depends(get_session),
    principal=Depends(get_principal),
):
    rows = await leaderboard(session, start_date, end_date)
    return [LeaderboardRow(committee=name, points=points) for (name, points) in rows]
