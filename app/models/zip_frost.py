from datetime import date
from typing import Optional

from sqlalchemy import Date, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ZipFrostData(Base):
    """Static ZIP code → hardiness zone / average frost date lookup."""

    __tablename__ = "zip_frost_data"

    zip_code: Mapped[str] = mapped_column(String(5), primary_key=True)
    hardiness_zone: Mapped[Optional[str]] = mapped_column(String(5), index=True)
    last_frost_date_avg: Mapped[Optional[date]] = mapped_column(Date)
    first_frost_date_avg: Mapped[Optional[date]] = mapped_column(Date)
    latitude: Mapped[Optional[float]] = mapped_column(Float)
    longitude: Mapped[Optional[float]] = mapped_column(Float)
    station_name: Mapped[Optional[str]] = mapped_column(String(200))
