"""period-primitives: Calendar periods, range algebra and gap-detecting caches."""

from period_primitives.cache import Cache, CacheHit, CacheMiss, missing_pieces
from period_primitives.erased import ResolutionTag, format_erased_resolution
from period_primitives.minutes import (
    FIVE_MINUTE,
    HALF_HOUR,
    HOUR,
    MINUTE,
    DaySubdivision,
    Minutes,
    minutes_resolution,
)
from period_primitives.periods import (
    DAY,
    MONTH,
    QUARTER,
    WEEK,
    YEAR,
    Day,
    Month,
    Quarter,
    Week,
    Weekday,
    Year,
    week_resolution,
)
from period_primitives.range import TimeRange
from period_primitives.resolution import (
    DateResolution,
    Period,
    SubDateResolution,
    TimeResolution,
)
from period_primitives.types import (
    EmptyRangeError,
    NonMatchingDataError,
    ParseError,
    ResolutionOrderError,
    UnexpectedStartDateError,
)
from period_primitives.zoned import Zoned, ZonedDate, ZonedSubDate, zoned_resolution

__all__ = [
    "Cache",
    "CacheHit",
    "CacheMiss",
    "DAY",
    "DateResolution",
    "Day",
    "DaySubdivision",
    "EmptyRangeError",
    "FIVE_MINUTE",
    "HALF_HOUR",
    "HOUR",
    "MINUTE",
    "MONTH",
    "Minutes",
    "Month",
    "NonMatchingDataError",
    "ParseError",
    "Period",
    "QUARTER",
    "Quarter",
    "ResolutionOrderError",
    "ResolutionTag",
    "SubDateResolution",
    "TimeRange",
    "TimeResolution",
    "UnexpectedStartDateError",
    "WEEK",
    "Week",
    "Weekday",
    "YEAR",
    "Year",
    "Zoned",
    "ZonedDate",
    "ZonedSubDate",
    "format_erased_resolution",
    "minutes_resolution",
    "missing_pieces",
    "week_resolution",
    "zoned_resolution",
]
