from __future__ import annotations
import uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer, Boolean, Uuid, CheckConstraint
from commissiestrijd.db import Base

class PossibleTask(Base):
    __tablename__ = "possible_tasks"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    description: Mapped[str] = mapped_column(String(500), unique=True, nullable=False)
    short_description: Mapped[str] = mapped_column(String(50), nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    max_per_period: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        CheckConstraint("points BETWEEN 1 AND 100", name="points_range"),
    )
