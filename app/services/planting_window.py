"""
Planting date computation and "plantable now" windowing.

Every planting date is an offset in whole weeks from the profile's last frost
date. Which timing field applies depends on the seed's planting method and,
for direct-sown seeds, on whether the plant is cold hardy:

    start_indoors                 last_frost - weeks_before_last_frost
    direct_sow, cold hardy        last_frost - weeks_before_last_frost_outdoor
    direct_sow, not cold hardy    last_frost + weeks_after_last_frost

Seeds with missing timing data resolve to no event; nothing here raises for a
seed. The only error is an unparseable last frost date.

All values are calendar dates (``datetime.date``), never datetimes, so
there is no time-of-day or UTC offset that could shift a date by one day.
"""
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

from app.services.plant_defaults import get_category

START_INDOORS = "start_indoors"
DIRECT_SOW = "direct_sow"

EVENT_INDOOR = "indoor"
EVENT_OUTDOOR = "outdoor"

DEFAULT_WINDOW_WEEKS = 4

_ISO_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})(?:[T ].*)?$")

DateLike = Union[date, datetime, str]


class InvalidFrostDateError(ValueError):
    """Raised when a last frost date cannot be parsed into a calendar date."""


@dataclass(frozen=True)
class PlantingEvent:
    date: date
    event_type: str  # "indoor" | "outdoor"


@dataclass(frozen=True)
class PlantableResult:
    seed: Any
    planting_date: date
    event_type: str
    days_until_planting: int


@dataclass(frozen=True)
class CalendarEntry:
    seed: Any
    planting_date: date
    event_type: str
    label: str
    category: str


# ── Date helpers ──────────────────────────────────────────────────────────────


def parse_local_date(value: DateLike) -> date:
    """
    Normalize a date-only value to a ``date``.

    Strings are parsed from their ``YYYY-MM-DD`` components directly; any
    trailing time portion is ignored. Datetimes keep only their calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        match = _ISO_DATE_RE.match(value.strip())
        if match:
            year, month, day = (int(part) for part in match.groups())
            try:
                return date(year, month, day)
            except ValueError as exc:
                raise InvalidFrostDateError(f"Invalid date: {value!r}") from exc
    raise InvalidFrostDateError(f"Invalid date: {value!r}")


def add_weeks(d: date, weeks: int) -> date:
    return d + timedelta(weeks=weeks)


def _weeks(value: Optional[int]) -> Optional[int]:
    # Negative offsets are treated the same as an unset field
    if value is None or value < 0:
        return None
    return value


def format_days_until(days: int) -> str:
    """Human label for a days-until-planting count ("3 days ago", "Today", "In 2 weeks")."""
    if days < 0:
        past = abs(days)
        return "1 day ago" if past == 1 else f"{past} days ago"
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    if days <= 7:
        return f"In {days} days"
    weeks = int(days / 7 + 0.5)
    return f"In {weeks} week{'s' if weeks > 1 else ''}"


# ── Resolver ──────────────────────────────────────────────────────────────────


def get_planting_date(seed: Any, last_frost_date: Optional[DateLike]) -> Optional[PlantingEvent]:
    """
    Resolve the single planting event for a seed, or None if its timing data
    is incomplete for its planting method.

    Succession planting fields are not consulted; a seed yields at most one event.
    """
    if last_frost_date is None:
        return None
    last_frost = parse_local_date(last_frost_date)

    if seed.planting_method == START_INDOORS:
        weeks = _weeks(seed.weeks_before_last_frost)
        if weeks is not None:
            return PlantingEvent(add_weeks(last_frost, -weeks), EVENT_INDOOR)
        return None

    if seed.planting_method == DIRECT_SOW:
        if seed.cold_hardy:
            weeks = _weeks(seed.weeks_before_last_frost_outdoor)
            if weeks is not None:
                return PlantingEvent(add_weeks(last_frost, -weeks), EVENT_OUTDOOR)
        else:
            # 0 weeks is valid: sow on the last frost date itself
            weeks = _weeks(seed.weeks_after_last_frost)
            if weeks is not None:
                return PlantingEvent(add_weeks(last_frost, weeks), EVENT_OUTDOOR)
        return None

    return None


def event_label(seed: Any, event: PlantingEvent) -> str:
    if event.event_type == EVENT_INDOOR:
        return "Start indoors"
    if seed.cold_hardy:
        return "Direct sow (cold hardy)"
    return "Direct sow"


# ── Window filter ─────────────────────────────────────────────────────────────


def get_seeds_plantable_now(
    seeds: Iterable[Any],
    last_frost_date: Optional[DateLike],
    window_weeks: int = DEFAULT_WINDOW_WEEKS,
    today: Optional[date] = None,
) -> list[PlantableResult]:
    """
    Return seeds whose planting date is recently due or due soon, earliest first.

    A seed is kept when its planting date is no later than ``today + window``
    and its own grace period (``planting_date + window``) has not ended
    before today. Both bounds are inclusive. Ties keep input order.
    """
    if window_weeks < 1:
        raise ValueError(f"window_weeks must be a positive integer, got {window_weeks}")
    if last_frost_date is None:
        return []

    last_frost = parse_local_date(last_frost_date)
    today = today or date.today()
    window_end = add_weeks(today, window_weeks)

    results: list[PlantableResult] = []
    for seed in seeds:
        event = get_planting_date(seed, last_frost)
        if event is None:
            continue

        planting_window_end = add_weeks(event.date, window_weeks)
        if planting_window_end >= today and event.date <= window_end:
            results.append(
                PlantableResult(
                    seed=seed,
                    planting_date=event.date,
                    event_type=event.event_type,
                    days_until_planting=(event.date - today).days,
                )
            )

    return sorted(results, key=lambda r: r.planting_date)


def filter_plantable(
    results: Sequence[PlantableResult],
    hide_planted: bool = False,
    show_indoor: bool = True,
    show_outdoor: bool = True,
) -> list[PlantableResult]:
    """Apply the dashboard's display toggles to a plantable-now result list."""
    filtered = []
    for item in results:
        if hide_planted and item.seed.is_planted:
            continue
        if not show_indoor and item.event_type == EVENT_INDOOR:
            continue
        if not show_outdoor and item.event_type == EVENT_OUTDOOR:
            continue
        filtered.append(item)
    return filtered


# ── Calendar ──────────────────────────────────────────────────────────────────


def build_calendar(
    seeds: Iterable[Any],
    last_frost_date: Optional[DateLike],
    categories: Optional[set[str]] = None,
) -> list[CalendarEntry]:
    """Every resolvable planting event, earliest first, optionally limited to some categories."""
    if last_frost_date is None:
        return []
    last_frost = parse_local_date(last_frost_date)

    entries: list[CalendarEntry] = []
    for seed in seeds:
        event = get_planting_date(seed, last_frost)
        if event is None:
            continue
        category = get_category(seed)
        if categories is not None and category not in categories:
            continue
        entries.append(
            CalendarEntry(
                seed=seed,
                planting_date=event.date,
                event_type=event.event_type,
                label=event_label(seed, event),
                category=category,
            )
        )

    return sorted(entries, key=lambda e: e.planting_date)
