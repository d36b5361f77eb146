from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel


class LocationRead(BaseModel):
    zip_code: str
    hardiness_zone: Optional[str] = None
    last_frost_date: Optional[date] = None
    first_frost_date: Optional[date] = None
    source: Literal["database", "estimated"]
    note: Optional[str] = None
