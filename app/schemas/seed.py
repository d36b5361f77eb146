from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PlantingMethod(str, Enum):
    direct_sow = "direct_sow"
    start_indoors = "start_indoors"


class SunRequirement(str, Enum):
    full_sun = "full_sun"
    partial_shade = "partial_shade"
    shade = "shade"


class WaterRequirement(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class Category(str, Enum):
    vegetable = "vegetable"
    flower = "flower"
    herb = "herb"


class _SeedFields(BaseModel):
    common_name: Optional[str] = None
    seed_company: Optional[str] = None
    product_url: Optional[str] = None
    image_url: Optional[str] = None
    purchase_year: Optional[int] = Field(None, ge=1900, le=2100)
    notes: Optional[str] = None

    days_to_maturity_min: Optional[int] = Field(None, ge=1)
    days_to_maturity_max: Optional[int] = Field(None, ge=1)
    planting_depth_inches: Optional[float] = Field(None, ge=0)
    spacing_inches: Optional[int] = Field(None, ge=0)
    row_spacing_inches: Optional[int] = Field(None, ge=0)
    sun_requirement: Optional[SunRequirement] = None
    water_requirement: Optional[WaterRequirement] = None

    planting_method: Optional[PlantingMethod] = None
    weeks_before_last_frost: Optional[int] = Field(None, ge=0)
    weeks_after_last_frost: Optional[int] = Field(None, ge=0)
    weeks_before_last_frost_outdoor: Optional[int] = Field(None, ge=0)
    succession_interval_days: Optional[int] = Field(None, ge=1)
    cold_stratification_weeks: Optional[int] = Field(None, ge=1)

    @field_validator("product_url", "image_url", mode="before")
    @classmethod
    def empty_url_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("product_url", "image_url")
    @classmethod
    def http_url(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.startswith(("http://", "https://")):
            raise ValueError("must be an http(s) URL")
        return v


class SeedCreate(_SeedFields):
    variety_name: str = Field(..., min_length=1)
    quantity_packets: int = Field(1, ge=1)
    cold_hardy: bool = False
    succession_planting: bool = False
    fall_planting: bool = False
    cold_stratification_required: bool = False
    is_favorite: bool = False
    is_planted: bool = False
    ai_extracted: bool = False
    raw_ai_response: Optional[dict] = None


class SeedUpdate(_SeedFields):
    variety_name: Optional[str] = Field(None, min_length=1)
    quantity_packets: Optional[int] = Field(None, ge=1)
    cold_hardy: Optional[bool] = None
    succession_planting: Optional[bool] = None
    fall_planting: Optional[bool] = None
    cold_stratification_required: Optional[bool] = None
    is_favorite: Optional[bool] = None
    is_planted: Optional[bool] = None


class SeedRead(BaseModel):
    id: int
    variety_name: str
    common_name: Optional[str] = None
    seed_company: Optional[str] = None
    product_url: Optional[str] = None
    image_url: Optional[str] = None
    purchase_year: Optional[int] = None
    quantity_packets: int
    notes: Optional[str] = None
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
    cold_hardy: bool
    weeks_before_last_frost_outdoor: Optional[int] = None
    succession_planting: bool
    succession_interval_days: Optional[int] = None
    fall_planting: bool
    cold_stratification_required: bool
    cold_stratification_weeks: Optional[int] = None
    is_favorite: bool
    is_planted: bool
    ai_extracted: bool
    ai_extraction_date: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SeedSummary(BaseModel):
    id: int
    variety_name: str
    common_name: Optional[str] = None
    image_url: Optional[str] = None
    days_to_maturity_min: Optional[int] = None
    is_favorite: bool
    is_planted: bool

    model_config = {"from_attributes": True}


class ImageFixResult(BaseModel):
    id: int
    name: str
    status: str
    image_url: Optional[str] = None


class ImageFixReport(BaseModel):
    message: str
    fixed: int
    total: int
    results: list[ImageFixResult]
