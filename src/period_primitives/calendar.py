"""Layer 0: proleptic Gregorian day arithmetic and UTC instant helpers.

Day numbers count from 0000-01-01 (day 0). Year 0 exists and is a leap
year, negative years run backwards from it, matching ISO 8601's
astronomical year numbering. ``datetime.date`` only covers years 1-9999,
so the pure-integer functions here are what make every index reachable;
the ``date``/``datetime`` bridges raise outside that window.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

MINUTES_PER_DAY = 1440
SECONDS_PER_MINUTE = 60

# 0001-01-01 is ordinal 1 for ``date`` and day 366 here (year 0 is leap).
DATE_ORDINAL_OFFSET = 365

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_DAYS_PER_ERA = 146097
# Days from 0000-01-01 to 0000-03-01; eras start on 1 March.
_MARCH_FIRST = 60


def days_from_civil(year: int, month: int, day: int) -> int:
    """Day number of a proleptic Gregorian date (0000-01-01 is 0)."""
    y = year - 1 if month <= 2 else year
    era = y // 400
    yoe = y - era * 400
    doy = (153 * ((month + 9) % 12) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * _DAYS_PER_ERA + doe + _MARCH_FIRST


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of days_from_civil: day number -> (year, month, day)."""
    z = days - _MARCH_FIRST
    era = z // _DAYS_PER_ERA
    doe = z - era * _DAYS_PER_ERA
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    y = yoe + era * 400
    return (y + 1 if m <= 2 else y, m, d)


def format_ymd(year: int, month: int, day: int) -> str:
    """ISO-style text for any proleptic date, e.g. '-0001-12-31'."""
    sign = "-" if year < 0 else ""
    return f"{sign}{abs(year):04d}-{month:02d}-{day:02d}"


def day_number(d: date) -> int:
    """Day number of a ``date``."""
    return d.toordinal() + DATE_ORDINAL_OFFSET


def date_from_day_number(days: int) -> date:
    """``date`` for a day number. Raises ValueError outside years 1-9999."""
    return date.fromordinal(days - DATE_ORDINAL_OFFSET)


def _reject_naive(dt: datetime, name: str) -> None:
    """Reject naive datetimes: instants must carry their UTC offset."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise TypeError(
            f"{name} must be a timezone-aware datetime, "
            f"got naive {dt.isoformat()}. "
            f"Attach tzinfo=timezone.utc (or the source zone) first."
        )


def to_utc(dt: datetime) -> datetime:
    """Normalise an aware datetime to UTC. Raises TypeError if naive."""
    _reject_naive(dt, "dt")
    return dt.astimezone(timezone.utc)


def utc_timestamp(dt: datetime) -> int:
    """Whole seconds since the Unix epoch, floored."""
    return (to_utc(dt) - UNIX_EPOCH) // timedelta(seconds=1)


def from_utc_timestamp(seconds: int) -> datetime:
    """Aware UTC datetime for whole seconds since the Unix epoch."""
    return UNIX_EPOCH + timedelta(seconds=seconds)


def midnight_utc(d: date) -> datetime:
    """00:00 UTC at the start of a calendar date."""
    return datetime.combine(d, time.min, tzinfo=timezone.utc)
