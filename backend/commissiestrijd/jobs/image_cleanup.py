from __future__ import annotations
import asyncio
import uuid
from dataclasses import dataclass
from datetime import time
import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from commissiestrijd.models.submitted_task import SubmittedTask
from commissiestrijd.services.clock import Clock, one_year_before
from commissiestrijd.services.storage import ImageStore

log = structlog.get_logger()

MIDNIGHT = time(0, 0)


@dataclass
class SweepReport:
    found: int = 0
    cleared: int = 0
    failed: int = 0
    aborted: bool = False


class ImageRetentionSweeper:
    """
    Deletes stored images of submissions older than the retention window.

    The submission rows stay; only their image and image_path go. Each row is handled
    in its own session and transaction so one bad file never blocks the others.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        store: ImageStore,
        clock: Clock,
        *,
        retention_years: int = 1,
        run_at: time = MIDNIGHT,
    ):
        self.session_factory = session_factory
        self.store = store
        self.clock = clock
        self.retention_years = retention_years
        self.run_at = run_at

    async def _expired(self) -> list[tuple[uuid.UUID, str]]:
        threshold = one_year_before(self.clock.utc_now(), self.retention_years)
        async with self.session_factory() as session:
            rows = (await session.execute(
                select(SubmittedTask.id, SubmittedTask.image_path)
                .where(SubmittedTask.submitted_at < threshold)
                .where(SubmittedTask.image_path != "")
                .order_by(SubmittedTask.submitted_at)
            )).all()
        return [(r[0], r[1]) for r in rows]

    async def _clear_one(self, task_id: uuid.UUID) -> bool:
        async with self.session_factory() as session:
            # commits on success, rolls back on any exception (cancellation included)
            async with session.begin():
                task = await session.get(SubmittedTask, task_id, with_for_update=True)
                if task is None or not task.image_path:
                    return False
                path = task.image_path
                self.store.delete(path)
                task.image_path = ""
        log.info("image_cleanup_row_cleared", submitted_task_id=str(task_id), image_path=path)
        return True

    async def sweep(self) -> SweepReport:
        report = SweepReport()
        try:
            rows = await self._expired()
        except Exception:
            log.exception("image_cleanup_query_failed")
            report.aborted = True
            return report

        report.found = len(rows)
        log.info("image_cleanup_sweep", found=report.found)
        for task_id, image_path in rows:
            try:
                if await self._clear_one(task_id):
                    report.cleared += 1
            except Exception:
                report.failed += 1
                log.exception("image_cleanup_row_failed", submitted_task_id=str(task_id), image_path=image_path)
        log.info("image_cleanup_finished", found=report.found, cleared=report.cleared, failed=report.failed)
        return report

    async def _sleep(self, stop: asyncio.Event, seconds: float) -> bool:
        """Sleep up to `seconds`; True when woken by `stop`."""
        try:
            await asyncio.wait_for(stop.wait(), timeout=seconds)
            return True
        except asyncio.TimeoutError:
            return stop.is_set()

    async def run(self, stop: asyncio.Event) -> None:
        log.info("image_cleanup_started", timezone=self.clock.tz_name, run_at=self.run_at.isoformat())
        while not stop.is_set():
            delay = self.clock.seconds_until(self.run_at)
            log.info("image_cleanup_waiting", seconds=round(delay, 1))
            if await self._sleep(stop, delay):
                break
            await self.sweep()
        log.info("image_cleanup_stopped")
