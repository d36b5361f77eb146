from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.deps import CurrentProfile, get_db
from app.models.profile import Profile
from app.schemas.calendar import (
    CalendarEntryRead,
    CalendarRead,
    PlantableItem,
    PlantableNowRead,
)
from app.schemas.seed import Category, SeedSummary
from app.services.plant_defaults import get_category
from app.services.planting_window import (
    build_calendar,
    filter_plantable,
    format_days_until,
    get_seeds_plantable_now,
)
from app.services.seed_service import list_seeds

router = APIRouter(prefix="/calendar", tags=["calendar"])


@router.get("", response_model=CalendarRead)
async def get_calendar(
    current_profile: CurrentProfile,
    db: AsyncSession = Depends(get_db),
    category: list[Category] | None = Query(None, description="Categories to include (repeatable); all if omitted"),
):
    """Every seed's planting date for this season, earliest first."""
    _require_frost_date(current_profile)
    seeds = await list_seeds(db, current_profile.id)

    categories = {c.value for c in category} if category else None
    entries = build_calendar(seeds, current_profile.last_frost_date, categories)

    return CalendarRead(
        last_frost_date=current_profile.last_frost_date,
        hardiness_zone=current_profile.hardiness_zone,
        entries=[
            CalendarEntryRead(
                seed=SeedSummary.model_validate(e.seed),
                planting_date=e.planting_date,
                event_type=e.event_type,
                label=e.label,
                category=e.category,
            )
            for e in entries
        ],
    )


@router.get("/plantable-now", response_model=PlantableNowRead)
async def get_plantable_now(
    current_profile: CurrentProfile,
    db: AsyncSession = Depends(get_db),
    window_weeks: int = Query(settings.PLANTABLE_WINDOW_WEEKS, ge=1, le=52),
    hide_planted: bool = Query(False, description="Hide seeds already marked as planted"),
    show_indoor: bool = Query(True, description="Include start-indoors events"),
    show_outdoor: bool = Query(True, description="Include outdoor sowing events"),
    limit: int = Query(5, ge=1, le=100),
):
    """Seeds recently due or due soon, for the dashboard's "what can I plant now" view."""
    _require_frost_date(current_profile)
    seeds = await list_seeds(db, current_profile.id)

    results = get_seeds_plantable_now(seeds, current_profile.last_frost_date, window_weeks)
    results = filter_plantable(results, hide_planted, show_indoor, show_outdoor)

    return PlantableNowRead(
        last_frost_date=current_profile.last_frost_date,
        window_weeks=window_weeks,
        total=len(results),
        items=[
            PlantableItem(
                seed=SeedSummary.model_validate(r.seed),
                planting_date=r.planting_date,
                event_type=r.event_type,
                category=get_category(r.seed),
                days_until_planting=r.days_until_planting,
                days_until_label=format_days_until(r.days_until_planting),
            )
            for r in results[:limit]
        ],
    )


# ── Helpers ───────────────────────────────────────────────────────────────────


def _require_frost_date(profile: Profile) -> None:
    if profile.last_frost_date is None:
        raise HTTPException(
            status_code=422,
            detail="Last frost date not set. Set your location in your profile to see planting dates.",
        )
