from __future__ import annotations
import uuid
from datetime import date
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Date, Uuid, CheckConstraint
from commissiestrijd.db import Base

class Period(Base):
    __tablename__ = "periods"
    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    start_date: Mapped[date] = mapped_column(Date(), nullable=False)
    end_date: Mapped[date] = mapped_column(Date(), nullable=False)

    __table_args__ = (
        CheckConstraint("start_date <= end_date", name="start_before_end"),
    )
