from typing import Optional

from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    url: str = Field(..., pattern=r"^https?://\S+$")


class ExtractedSeedData(BaseModel):
    """Tool output from the extraction model, plus the source URL."""

    is_seed_product_page: bool
    variety_name: Optional[str] = None
    common_name: Optional[str] = None
    company_name: Optional[str] = None
    days_to_maturity_min: Optional[int] = None
    days_to_maturity_max: Optional[int] = None
    planting_depth_inches: Optional[float] = None
    spacing_inches: Optional[int] = None
    row_spacing_inches: Optional[int] = None
    sun_requirement: Optional[str] = None
    water_requirement: Optional[str] = None
    planting_method: Optional[str] = None
    weeks_before_last_frost: Optional[int] = None
    weeks_after_last_frost: Optional[int] = None
    cold_hardy: Optional[bool] = None
    weeks_before_last_frost_outdoor: Optional[int] = None
    succession_planting: Optional[bool] = None
    succession_interval_days: Optional[int] = None
    fall_planting: Optional[bool] = None
    cold_stratification_required: Optional[bool] = None
    cold_stratification_weeks: Optional[int] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    product_url: str
    ai_extracted: bool = True
