from __future__ import annotations
from collections import Counter, defaultdict
from datetime import date, datetime, time, timedelta, timezone as dt_tz
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from commissiestrijd.errors import InvalidInput
from commissiestrijd.models.committee import Committee
from commissiestrijd.models.submitted_task import SubmittedTask, TaskStatus


def _day_start(d: date) -> datetime:
    # submitted_at holds local wall-clock readings labelled UTC, so date bounds are UTC midnights
    return datetime.combine(d, time(0, 0), tzinfo=dt_tz.utc)


def score(rows: list[SubmittedTask]) -> dict[str, int]:
    """
    Sum approved points per committee.

    Rows must be ordered oldest first. Within one (committee, possible task) group only the
    first `max_per_period` rows count when a row carries a cap.
    """
    seen: Counter[tuple[str, object]] = Counter()
    totals: dict[str, int] = defaultdict(int)
    for r in rows:
        key = (r.committee, r.possible_task_id)
        seen[key] += 1
        if r.max_per_period is not None and seen[key] > r.max_per_period:
            continue
        totals[r.committee] += r.points
    return totals


async def leaderboard(session: AsyncSession, start_date: date, end_date: date) -> list[tuple[str, int]]:
    if start_date > end_date:
        raise InvalidInput("Start date must be earlier than end date.")
    committees = (await session.execute(select(Committee.name))).scalars().all()
    q = (
        select(SubmittedTask)
        .where(SubmittedTask.status == TaskStatus.APPROVED)
        .where(SubmittedTask.submitted_at >= _day_start(start_date))
        .order_by(SubmittedTask.submitted_at.asc(), SubmittedTask.id)
    )
    # date.max has no next day; the range is then open-ended
    if end_date < date.max:
        q = q.where(SubmittedTask.submitted_at < _day_start(end_date + timedelta(days=1)))
    rows = (await session.execute(q)).scalars().all()
    totals = score(list(rows))
    board = [(name, int(totals.get(name, 0))) for name in committees]
    board.sort(key=lambda item: (-item[1], item[0]))
    return board
