from __future__ import annotations
from datetime import date
from uuid import UUID
from pydantic import BaseModel, ConfigDict


class CommitteePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    name: str

class CommitteeCreate(BaseModel):
    name: str

class CommitteeRename(BaseModel):
    new_name: str


class PeriodPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    start_date: date
    end_date: date

class PeriodWrite(BaseModel):
    name: str
    start_date: date
    end_date: date


class PossibleTaskPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    description: str
    short_description: str
    points: int
    is_active: bool
    max_per_period: int | None = None

class PossibleTaskCreate(BaseModel):
    description: str
    short_description: str
    points: int
    max_per_period: int | None = None

class PossibleTaskEdit(PossibleTaskCreate):
    is_active: bool


class LeaderboardRow(BaseModel):
    committee: str
    points: int
