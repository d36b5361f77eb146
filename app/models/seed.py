from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class Seed(Base):
    __tablename__ = "seeds"

    id: Mapped[int] = mapped_column(primary_key=True)
    profile_id: Mapped[int] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), index=True)

    # Basic info (user-entered)
    variety_name: Mapped[str] = mapped_column(String(200), index=True)
    common_name: Mapped[Optional[str]] = mapped_column(String(200), index=True)
    seed_company: Mapped[Optional[str]] = mapped_column(String(200))
    product_url: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    purchase_year: Mapped[Optional[int]] = mapped_column(Integer)
    quantity_packets: Mapped[int] = mapped_column(Integer, default=1)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    # Growing data (AI-extracted or user-entered)
    days_to_maturity_min: Mapped[Optional[int]] = mapped_column(Integer)
    days_to_maturity_max: Mapped[Optional[int]] = mapped_column(Integer)
    planting_depth_inches: Mapped[Optional[float]] = mapped_column(Float)
    spacing_inches: Mapped[Optional[int]] = mapped_column(Integer)
    row_spacing_inches: Mapped[Optional[int]] = mapped_column(Integer)
    sun_requirement: Mapped[Optional[str]] = mapped_column(
        Enum("full_sun", "partial_shade", "shade", name="seed_sun_req_enum")
    )
    water_requirement: Mapped[Optional[str]] = mapped_column(
        Enum("low", "medium", "high", name="seed_water_req_enum")
    )

    # Planting strategy
    planting_method: Mapped[Optional[str]] = mapped_column(
        Enum("direct_sow", "start_indoors", name="planting_method_enum")
    )
    weeks_before_last_frost: Mapped[Optional[int]] = mapped_column(Integer)  # start_indoors
    weeks_after_last_frost: Mapped[Optional[int]] = mapped_column(Integer)  # direct_sow, not cold hardy
    cold_hardy: Mapped[bool] = mapped_column(Boolean, default=False)
    weeks_before_last_frost_outdoor: Mapped[Optional[int]] = mapped_column(Integer)  # direct_sow, cold hardy
    succession_planting: Mapped[bool] = mapped_column(Boolean, default=False)
    succession_interval_days: Mapped[Optional[int]] = mapped_column(Integer)
    fall_planting: Mapped[bool] = mapped_column(Boolean, default=False)
    cold_stratification_required: Mapped[bool] = mapped_column(Boolean, default=False)
    cold_stratification_weeks: Mapped[Optional[int]] = mapped_column(Integer)

    # Status flags
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    is_planted: Mapped[bool] = mapped_column(Boolean, default=False, index=True)

    # AI metadata
    ai_extracted: Mapped[bool] = mapped_column(Boolean, default=False)
    ai_extraction_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    raw_ai_response: Mapped[Optional[dict]] = mapped_column(JSON)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    profile: Mapped["Profile"] = relationship(back_populates="seeds")
