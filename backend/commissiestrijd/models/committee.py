from __future__ import annotations
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Text
from commissiestrijd.db import Base

class Committee(Base):
    __tablename__ = "committees"
    # natural key; submitted_tasks reference it by name
    name: Mapped[str] = mapped_column(Text(), primary_key=True)
