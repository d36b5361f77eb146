from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import Date, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(primary_key=True)
    display_name: Mapped[Optional[str]] = mapped_column(String(100))

    # Location
    zip_code: Mapped[Optional[str]] = mapped_column(String(10))
    hardiness_zone: Mapped[Optional[str]] = mapped_column(String(5))
    last_frost_date: Mapped[Optional[date]] = mapped_column(Date)
    first_frost_date: Mapped[Optional[date]] = mapped_column(Date)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    seeds: Mapped[list["Seed"]] = relationship(back_populates="profile", cascade="all, delete-orphan")
