from datetime import date

import pytest

from app.models.zip_frost import ZipFrostData
from app.services.frost_dates import (
    ESTIMATE_NOTE,
    estimate_frost_data,
    is_valid_zip,
    lookup_frost_data,
    next_occurrence,
    region_for_prefix,
)


@pytest.mark.parametrize("zip_code, valid", [("60601", True), ("6060", False), ("606011", False),
                                             ("6060a", False), ("", False), (None, False)])
def test_is_valid_zip(zip_code, valid):
    assert is_valid_zip(zip_code) is valid


def test_next_occurrence_this_year_when_upcoming():
    assert next_occurrence(5, 1, today=date(2025, 3, 1)) == date(2025, 5, 1)


def test_next_occurrence_today_still_counts():
    assert next_occurrence(5, 1, today=date(2025, 5, 1)) == date(2025, 5, 1)


def test_next_occurrence_rolls_to_next_year():
    assert next_occurrence(5, 1, today=date(2025, 5, 2)) == date(2026, 5, 1)


@pytest.mark.parametrize(
    "prefix, region",
    [
        (100, "Northeast"),
        (10, "Northeast"),
        (300, "Southeast"),
        (606, "Midwest"),
        (750, "South Central"),
        (802, "Mountain West"),
        (972, "Pacific Northwest"),
        (941, "California"),
        (5, "Default"),
        (995, "Default"),
    ],
)
def test_region_for_prefix(prefix, region):
    assert region_for_prefix(prefix).name == region


def test_estimate_frost_data_shape():
    data = estimate_frost_data("60601", today=date(2025, 1, 15))
    assert data == {
        "zip_code": "60601",
        "hardiness_zone": "5b",
        "last_frost_date": date(2025, 5, 10),
        "first_frost_date": date(2025, 10, 1),
        "source": "estimated",
        "note": ESTIMATE_NOTE,
    }


def test_estimate_first_frost_rolls_independently():
    # Past last frost but before first frost: only last frost moves to next year
    data = estimate_frost_data("60601", today=date(2025, 7, 1))
    assert data["last_frost_date"] == date(2026, 5, 10)
    assert data["first_frost_date"] == date(2025, 10, 1)


async def test_lookup_prefers_database_row(db):
    db.add(ZipFrostData(
        zip_code="60601",
        hardiness_zone="6a",
        last_frost_date_avg=date(2025, 4, 22),
        first_frost_date_avg=date(2025, 10, 25),
    ))
    await db.commit()

    data = await lookup_frost_data("60601", db)
    assert data["source"] == "database"
    assert data["hardiness_zone"] == "6a"
    assert data["last_frost_date"] == date(2025, 4, 22)
    assert data["note"] is None


async def test_lookup_falls_back_to_estimate(db):
    data = await lookup_frost_data("97201", db, today=date(2025, 1, 1))
    assert data["source"] == "estimated"
    assert data["hardiness_zone"] == "8b"
    assert data["last_frost_date"] == date(2025, 4, 1)
