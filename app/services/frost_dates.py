"""
ZIP code → hardiness zone and frost date lookup.

Checks the zip_frost_data table first. On a miss, estimates from the 3-digit
ZIP prefix using a coarse continental-US region table. Good enough to get a
planting calendar going, not a substitute for local extension office data.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.zip_frost import ZipFrostData

logger = logging.getLogger(__name__)

ZIP_RE = re.compile(r"^\d{5}$")

ESTIMATE_NOTE = "Frost dates are estimated. For accurate dates, check your local extension office."


@dataclass(frozen=True)
class FrostRegion:
    name: str
    prefix_ranges: tuple[tuple[int, int], ...]
    hardiness_zone: str
    last_frost: tuple[int, int]   # (month, day)
    first_frost: tuple[int, int]  # (month, day)


# First match wins. Florida overlaps the Southeast range and is never reached;
# kept so the table reads as the full region list.
_REGIONS: list[FrostRegion] = [
    FrostRegion("Northeast", ((10, 69), (100, 149)), "6a", (5, 1), (10, 15)),
    FrostRegion("Southeast", ((200, 349),), "7b", (4, 1), (11, 1)),
    FrostRegion("Florida", ((320, 349),), "9a", (2, 15), (12, 15)),
    FrostRegion("Midwest", ((400, 499), (500, 629)), "5b", (5, 10), (10, 1)),
    FrostRegion("South Central", ((700, 799),), "8a", (3, 15), (11, 15)),
    FrostRegion("Mountain West", ((800, 899),), "5a", (5, 15), (9, 30)),
    FrostRegion("Pacific Northwest", ((970, 994),), "8b", (4, 1), (11, 1)),
    FrostRegion("California", ((900, 961),), "9b", (2, 1), (12, 15)),
]

_DEFAULT_REGION = FrostRegion("Default", (), "6a", (4, 25), (10, 20))


def is_valid_zip(zip_code: Optional[str]) -> bool:
    return bool(zip_code) and bool(ZIP_RE.match(zip_code))


def next_occurrence(month: int, day: int, today: Optional[date] = None) -> date:
    """This year's month/day if it hasn't passed yet, otherwise next year's."""
    # Compares dates only: on the day itself this year's date is returned
    today = today or date.today()
    candidate = date(today.year, month, day)
    if candidate < today:
        return date(today.year + 1, month, day)
    return candidate


def region_for_prefix(zip_prefix: int) -> FrostRegion:
    for region in _REGIONS:
        for low, high in region.prefix_ranges:
            if low <= zip_prefix <= high:
                return region
    return _DEFAULT_REGION


def estimate_frost_data(zip_code: str, today: Optional[date] = None) -> dict:
    region = region_for_prefix(int(zip_code[:3]))
    return {
        "zip_code": zip_code,
        "hardiness_zone": region.hardiness_zone,
        "last_frost_date": next_occurrence(*region.last_frost, today=today),
        "first_frost_date": next_occurrence(*region.first_frost, today=today),
        "source": "estimated",
        "note": ESTIMATE_NOTE,
    }


async def lookup_frost_data(zip_code: str, db: AsyncSession, today: Optional[date] = None) -> dict:
    """
    Return zone and frost dates for a 5-digit ZIP code.

    Returns dict with keys: zip_code, hardiness_zone, last_frost_date,
    first_frost_date, source ("database" | "estimated"), note.
    """
    result = await db.execute(select(ZipFrostData).where(ZipFrostData.zip_code == zip_code))
    row = result.scalar_one_or_none()

    if row is not None:
        logger.debug("frost lookup: database hit for %s", zip_code)
        return {
            "zip_code": row.zip_code,
            "hardiness_zone": row.hardiness_zone,
            "last_frost_date": row.last_frost_date_avg,
            "first_frost_date": row.first_frost_date_avg,
            "source": "database",
            "note": None,
        }

    logger.debug("frost lookup: no row for %s — estimating from prefix", zip_code)
    return estimate_frost_data(zip_code, today=today)
