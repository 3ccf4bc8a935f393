"""Date-level kinds: Day, Week, Month, Quarter and Year.

Epochs (index 0):
    Day      0000-01-01
    Week     the week starting 2021-01-04 + start weekday offset
    Month    0000-01
    Quarter  0000-Q1
    Year     year 0

Day, Month, Quarter and Year indices are plain proleptic calendar
arithmetic, so negative indices reach dates before year 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import IntEnum

from period_primitives.calendar import (
    civil_from_days,
    date_from_day_number,
    day_number,
    days_from_civil,
    format_ymd,
)
from period_primitives.resolution import (
    DAY_RANK,
    MONTH_RANK,
    QUARTER_RANK,
    WEEK_RANK,
    YEAR_RANK,
    DateResolution,
    TimeResolution,
)
from period_primitives.types import ParseError, UnexpectedStartDateError

_ISO_DATE_FORMAT = "%Y-%m-%d"
_WEEK_PREFIX = "Week starting "

_MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class Weekday(IntEnum):
    """Start weekday of a week. Values match ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        return self.name.title()


def _parse_iso_date(text: str, type_name: str, full: str) -> date:
    try:
        return datetime.strptime(text, _ISO_DATE_FORMAT).date()
    except ValueError as e:
        raise ParseError(type_name, full, str(e)) from e


def _parse_int(text: str, type_name: str, full: str) -> int:
    try:
        return int(text)
    except ValueError as e:
        raise ParseError(type_name, full, str(e)) from e


# ----------------------------------------------------------------------
# Day
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Day(DateResolution):
    """A calendar day. Index 0 is 0000-01-01."""

    index: int

    SPAN_RANK = DAY_RANK

    @classmethod
    def from_date(cls, d: date, params: None = None) -> Day:
        return cls(day_number(d))

    @classmethod
    def parse(cls, text: str) -> Day:
        return cls.from_date(_parse_iso_date(text, "Day", text))

    def start(self) -> date:
        return date_from_day_number(self.index)

    def end(self) -> date:
        return self.start()

    def ymd(self) -> tuple[int, int, int]:
        return civil_from_days(self.index)

    def year_num(self) -> int:
        return self.ymd()[0]

    def month_num(self) -> int:
        return self.ymd()[1]

    def quarter(self) -> Quarter:
        return Quarter.from_date(self.start())

    def week(self, start_day: Weekday = Weekday.MONDAY) -> Week:
        return Week.from_date(self.start(), start_day)

    def __str__(self) -> str:
        return format_ymd(*self.ymd())


# ----------------------------------------------------------------------
# Week
# ----------------------------------------------------------------------


def _week_base(start_day: Weekday) -> int:
    """Day number of the first day of week 0 (2021-01-04 is a Monday)."""
    return days_from_civil(2021, 1, 4) + int(start_day)


@dataclass(frozen=True)
class Week(DateResolution):
    """Seven days beginning on ``start_day``."""

    index: int
    start_day: Weekday = Weekday.MONDAY

    SPAN_RANK = WEEK_RANK

    def __post_init__(self) -> None:
        # Accept plain ints for the weekday but always store the enum.
        object.__setattr__(self, "start_day", Weekday(self.start_day))

    @classmethod
    def from_monotonic(
        cls, index: int, params: Weekday | None = None
    ) -> Week:
        return cls(index, Weekday.MONDAY if params is None else params)

    @classmethod
    def from_date(cls, d: date, params: Weekday | None = None) -> Week:
        start_day = Weekday.MONDAY if params is None else Weekday(params)
        return cls((day_number(d) - _week_base(start_day)) // 7, start_day)

    @classmethod
    def kind_name(cls, params: Weekday | None = None) -> str:
        start_day = Weekday.MONDAY if params is None else Weekday(params)
        return f"Week[StartDay:{start_day.label}]"

    @classmethod
    def parse(cls, text: str, start_day: Weekday = Weekday.MONDAY) -> Week:
        """Parse 'Week starting 2021-12-06'; the date must be a start day."""
        type_name = cls.kind_name(start_day)
        if not text.startswith(_WEEK_PREFIX):
            raise ParseError(type_name, text, f"expected {_WEEK_PREFIX!r}")
        start = _parse_iso_date(text[len(_WEEK_PREFIX):], type_name, text)
        if start.weekday() != start_day:
            raise UnexpectedStartDateError(
                start, Weekday(start_day), Weekday(start.weekday())
            )
        return cls.from_date(start, start_day)

    def params(self) -> Weekday:
        return self.start_day

    def _first_day_number(self) -> int:
        return _week_base(self.start_day) + 7 * self.index

    def start(self) -> date:
        return date_from_day_number(self._first_day_number())

    def ymd(self) -> tuple[int, int, int]:
        return civil_from_days(self._first_day_number())

    def __str__(self) -> str:
        return f"{_WEEK_PREFIX}{format_ymd(*self.ymd())}"


# ----------------------------------------------------------------------
# Month
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Month(DateResolution):
    """A calendar month. Index is 12 * year + (month - 1)."""

    index: int

    SPAN_RANK = MONTH_RANK

    @classmethod
    def from_date(cls, d: date, params: None = None) -> Month:
        return cls.from_parts(d.year, d.month)

    @classmethod
    def from_parts(cls, year: int, month: int) -> Month:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be 1-12, got {month}")
        return cls(12 * year + month - 1)

    @classmethod
    def parse(cls, text: str) -> Month:
        """Parse 'Jan-2021'."""
        name, sep, year = text.partition("-")
        if not sep or name not in _MONTH_NAMES:
            raise ParseError("Month", text, f"unknown month name {name!r}")
        return cls.from_parts(
            _parse_int(year, "Month", text), _MONTH_NAMES.index(name) + 1
        )

    def ymd(self) -> tuple[int, int, int]:
        return (self.index // 12, self.index % 12 + 1, 1)

    def start(self) -> date:
        year, month, _ = self.ymd()
        return date(year, month, 1)

    def year_num(self) -> int:
        return self.index // 12

    def month_num(self) -> int:
        return self.index % 12 + 1

    def quarter(self) -> Quarter:
        return Quarter(4 * self.year_num() + (self.month_num() - 1) // 3)

    def year(self) -> Year:
        return Year(self.year_num())

    def __str__(self) -> str:
        return f"{_MONTH_NAMES[self.month_num() - 1]}-{self.year_num()}"


# ----------------------------------------------------------------------
# Quarter
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Quarter(DateResolution):
    """A calendar quarter. Index is 4 * year + (quarter - 1)."""

    index: int

    SPAN_RANK = QUARTER_RANK

    @classmethod
    def from_date(cls, d: date, params: None = None) -> Quarter:
        return cls(4 * d.year + (d.month - 1) // 3)

    @classmethod
    def parse(cls, text: str) -> Quarter:
        """Parse 'Q1-2021', or an ISO date inside the quarter."""
        try:
            return cls.from_date(datetime.strptime(text, _ISO_DATE_FORMAT).date())
        except ValueError:
            pass

        label, sep, year = text.partition("-")
        if not sep or len(label) != 2 or label[0] != "Q" or label[1] not in "1234":
            raise ParseError("Quarter", text, "expected 'Qn-YYYY'")
        return cls(4 * _parse_int(year, "Quarter", text) + int(label[1]) - 1)

    def ymd(self) -> tuple[int, int, int]:
        return (self.year_num(), 3 * (self.quarter_num() - 1) + 1, 1)

    def start(self) -> date:
        year, month, _ = self.ymd()
        return date(year, month, 1)

    def year_num(self) -> int:
        return self.index // 4

    def quarter_num(self) -> int:
        return self.index % 4 + 1

    def first_month(self) -> Month:
        return Month.from_parts(self.year_num(), 3 * (self.quarter_num() - 1) + 1)

    def last_month(self) -> Month:
        return self.first_month().succ_n(2)

    def year(self) -> Year:
        return Year(self.year_num())

    def __str__(self) -> str:
        return f"Q{self.quarter_num()}-{self.year_num()}"


# ----------------------------------------------------------------------
# Year
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Year(DateResolution):
    """A calendar year. Index is the (astronomical) year number."""

    index: int

    SPAN_RANK = YEAR_RANK

    @classmethod
    def from_date(cls, d: date, params: None = None) -> Year:
        return cls(d.year)

    @classmethod
    def parse(cls, text: str) -> Year:
        return cls(_parse_int(text, "Year", text))

    def ymd(self) -> tuple[int, int, int]:
        return (self.index, 1, 1)

    def start(self) -> date:
        return date(self.index, 1, 1)

    def year_num(self) -> int:
        return self.index

    def first_month(self) -> Month:
        return Month.from_parts(self.index, 1)

    def last_month(self) -> Month:
        return Month.from_parts(self.index, 12)

    def first_quarter(self) -> Quarter:
        return Quarter(4 * self.index)

    def last_quarter(self) -> Quarter:
        return Quarter(4 * self.index + 3)

    def __str__(self) -> str:
        return str(self.index)


def week_resolution(start_day: Weekday = Weekday.MONDAY) -> TimeResolution:
    """Resolution kind for weeks beginning on ``start_day``."""
    return TimeResolution(Week, Weekday(start_day))


DAY = TimeResolution(Day)
WEEK = week_resolution(Weekday.MONDAY)
MONTH = TimeResolution(Month)
QUARTER = TimeResolution(Quarter)
YEAR = TimeResolution(Year)
