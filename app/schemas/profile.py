from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    zip_code: Optional[str] = Field(None, max_length=10)
    hardiness_zone: Optional[str] = Field(None, max_length=5)
    last_frost_date: Optional[date] = None
    first_frost_date: Optional[date] = None


class ProfileRead(BaseModel):
    id: int
    display_name: Optional[str] = None
    zip_code: Optional[str] = None
    hardiness_zone: Optional[str] = None
    last_frost_date: Optional[date] = None
    first_frost_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
