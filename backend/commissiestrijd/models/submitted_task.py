from __future__ import annotations
import enum
import uuid
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Integer, DateTime, Enum, ForeignKey, Uuid, CheckConstraint
from commissiestrijd.db import Base


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SubmittedTask(Base):
    __tablename__ = "submitted_tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)

    possible_task_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("possible_tasks.id"), index=True, nullable=False
    )
    committee: Mapped[str] = mapped_column(
        Text(), ForeignKey("committees.name", onupdate="CASCADE"), index=True, nullable=False
    )

    # Local wall-clock time of the configured zone, labelled UTC
    submitted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)

    # Generated filename in the image store; "" once the retention sweeper removed the image
    image_path: Mapped[str] = mapped_column(String(255), nullable=False)

    status: Mapped[TaskStatus] = mapped_column(
        Enum(
            TaskStatus,
            name="submitted_task_status",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=TaskStatus.PENDING,
    )
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    rejection_reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
    max_per_period: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("points BETWEEN 1 AND 100", name="points_range"),
        CheckConstraint(
            "(status = 'rejected' AND rejection_reason IS NOT NULL) "
            "OR (status <> 'rejected' AND rejection_reason IS NULL)",
            name="reason_iff_rejected",
        ),
        CheckConstraint("status IN ('pending', 'approved', 'rejected')", name="status_values"),
    )
