"""Shared test fixtures and data loading for period-primitives.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference instant: 1970-01-01 00:00 UTC (minute 0).
Reference day:     0000-01-01 (day 0).
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")


# ---------------------------------------------------------------------------
# Reference constants derived from reference.json
# ---------------------------------------------------------------------------
UNIX_EPOCH = datetime.fromisoformat(_reference["unix_epoch"])
MINUTES_PER_DAY = _reference["minutes_per_day"]
DATE_EPOCHS: list[dict] = _reference["date_epochs"]
INSTANT_EPOCHS: list[dict] = _reference["instant_epochs"]


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def make_kind(name: str, start_day: str | None = None):
    """Resolution kind from its fixture name.

    >>> make_kind("week", "tuesday").label
    'Week[StartDay:Tuesday]'

    ``"<kind>@<IANA key>"`` names the zoned variant, e.g. ``"hour@America/New_York"``.
    """
    from period_primitives import minutes, periods
    from period_primitives.zoned import zoned_resolution

    if "@" in name:
        inner, tz = name.split("@", 1)
        return zoned_resolution(make_kind(inner, start_day), tz)
    if name == "week":
        return periods.week_resolution(periods.Weekday[(start_day or "monday").upper()])
    return {
        "minute": minutes.MINUTE,
        "five_minute": minutes.FIVE_MINUTE,
        "half_hour": minutes.HALF_HOUR,
        "hour": minutes.HOUR,
        "day": periods.DAY,
        "month": periods.MONTH,
        "quarter": periods.QUARTER,
        "year": periods.YEAR,
    }[name]


def parse_period(case: dict):
    """Parse ``case["text"]`` with the kind named in the case."""
    from period_primitives.periods import Week, Weekday

    kind = make_kind(case["kind"], case.get("start_day"))
    if kind.period_type is Week:
        return Week.parse(case["text"], Weekday[case["start_day"].upper()])
    return kind.period_type.parse(case["text"])


def d(iso: str) -> date:
    """Date from 'YYYY-MM-DD'."""
    return date.fromisoformat(iso)


def day(iso: str):
    """Day period from 'YYYY-MM-DD'."""
    from period_primitives.periods import Day

    return Day.from_date(d(iso))


def day_range(first: str, last: str):
    """TimeRange of days from ``first`` to ``last`` inclusive."""
    from period_primitives.range import TimeRange

    return TimeRange.from_bounds(day(first), day(last))


def utc(iso: str) -> datetime:
    """Aware datetime from an ISO string carrying its offset."""
    return datetime.fromisoformat(iso)


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def unix_epoch() -> datetime:
    return UNIX_EPOCH


@pytest.fixture
def empty_cache():
    from period_primitives.cache import Cache

    return Cache.empty()


@pytest.fixture
def strict_cache():
    from period_primitives.cache import Cache

    return Cache.empty(strict=True)


@pytest.fixture
def year_2024():
    """One-period range covering calendar year 2024 (a leap year)."""
    from period_primitives.periods import Year
    from period_primitives.range import TimeRange

    return TimeRange.new(Year(2024), 1)


@pytest.fixture
def new_york():
    from zoneinfo import ZoneInfo

    return ZoneInfo("America/New_York")


@pytest.fixture
def havana():
    from zoneinfo import ZoneInfo

    return ZoneInfo("America/Havana")
