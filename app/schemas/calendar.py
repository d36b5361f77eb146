from datetime import date
from typing import Literal

from pydantic import BaseModel

from app.schemas.seed import SeedSummary


class CalendarEntryRead(BaseModel):
    seed: SeedSummary
    planting_date: date
    event_type: Literal["indoor", "outdoor"]
    label: str
    category: str


class CalendarRead(BaseModel):
    last_frost_date: date
    hardiness_zone: str | None = None
    entries: list[CalendarEntryRead]


class PlantableItem(BaseModel):
    seed: SeedSummary
    planting_date: date
    event_type: Literal["indoor", "outdoor"]
    category: str
    days_until_planting: int
    days_until_label: str


class PlantableNowRead(BaseModel):
    last_frost_date: date
    window_weeks: int
    total: int
    items: list[PlantableItem]
