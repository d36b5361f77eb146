from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.deps import get_db
from app.schemas.location import LocationRead
from app.services.frost_dates import is_valid_zip, lookup_frost_data

router = APIRouter(prefix="/location", tags=["location"])


@router.get("", response_model=LocationRead)
async def get_location(
    zip: str | None = Query(None, description="5-digit US ZIP code"),
    db: AsyncSession = Depends(get_db),
):
    """Look up hardiness zone and frost dates for a ZIP code."""
    if not is_valid_zip(zip):
        raise HTTPException(status_code=400, detail="Valid 5-digit ZIP code is required")
    data = await lookup_frost_data(zip, db)
    return LocationRead(**data)
