from __future__ import annotations
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict
from commissiestrijd.models.submitted_task import TaskStatus


class SubmittedTaskPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    possible_task_id: UUID
    committee: str
    submitted_at: datetime
    image_path: str
    status: TaskStatus
    points: int
    rejection_reason: str | None = None
    max_per_period: int | None = None


class SubmittedTaskPage(BaseModel):
    items: list[SubmittedTaskPublic]
    page_amount: int
