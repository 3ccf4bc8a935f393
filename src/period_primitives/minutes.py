"""Sub-date kinds: fixed-length minute periods on the UTC grid.

Index 0 is the period starting 1970-01-01 00:00 UTC. The length must
divide a day evenly (1, 2, 3, 4, 5, 6, 10, 12, 15, 20, 30, 60, 120, ...)
so that periods tile every day without straddling midnight.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from period_primitives.calendar import (
    MINUTES_PER_DAY,
    SECONDS_PER_MINUTE,
    from_utc_timestamp,
    midnight_utc,
    utc_timestamp,
)
from period_primitives.resolution import SubDateResolution, TimeResolution
from period_primitives.types import ParseError

_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
_SEPARATOR = " => "


def _validate_length(length: int) -> None:
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f"length must be an int, got {type(length).__name__}")
    if length <= 0 or MINUTES_PER_DAY % length != 0:
        raise ValueError(
            f"length {length} does not divide a day of {MINUTES_PER_DAY} "
            f"minutes. Periods would not align to midnight."
        )


def _parse_datetime(text: str, type_name: str, full: str) -> datetime:
    try:
        parsed = datetime.strptime(text, _DATETIME_FORMAT)
    except ValueError as e:
        raise ParseError(type_name, full, str(e)) from e
    return parsed.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class Minutes(SubDateResolution):
    """A period of ``length`` minutes, aligned to the UTC minute grid."""

    index: int
    length: int = 1

    def __post_init__(self) -> None:
        _validate_length(self.length)

    @classmethod
    def from_monotonic(cls, index: int, params: int | None = None) -> Minutes:
        return cls(index, 1 if params is None else params)

    @classmethod
    def from_utc_datetime(
        cls, dt: datetime, params: int | None = None
    ) -> Minutes:
        length = 1 if params is None else params
        _validate_length(length)
        return cls(utc_timestamp(dt) // (length * SECONDS_PER_MINUTE), length)

    @classmethod
    def first_on_day(cls, d: date, params: int | None = None) -> Minutes:
        return cls.from_utc_datetime(midnight_utc(d), params)

    @classmethod
    def unit_span_rank(cls, params: int | None = None) -> int:
        return 1 if params is None else params

    @classmethod
    def kind_name(cls, params: int | None = None) -> str:
        return f"Minutes[Length:{1 if params is None else params}]"

    @classmethod
    def parse(cls, text: str, length: int = 1) -> Minutes:
        """Parse '2021-01-01 10:05' (length 1) or 'start => end' pairs."""
        type_name = cls.kind_name(length)
        if length == 1:
            return cls.from_utc_datetime(
                _parse_datetime(text, type_name, text), length
            )

        parts = text.split(_SEPARATOR)
        if len(parts) != 2:
            raise ParseError(type_name, text, "expected 'start => end'")
        start = _parse_datetime(parts[0], type_name, text)
        end = _parse_datetime(parts[1], type_name, text)

        if (start.hour * 60 + start.minute) % length != 0:
            raise ParseError(
                type_name, text, f"start is not aligned to {length} minutes"
            )
        if start + timedelta(minutes=length) != end:
            raise ParseError(
                type_name, text, f"end must be {length} minutes after start"
            )
        return cls.from_utc_datetime(start, length)

    def params(self) -> int:
        return self.length

    def start_datetime(self) -> datetime:
        return from_utc_timestamp(self.index * self.length * SECONDS_PER_MINUTE)

    def occurs_on_date(self) -> date:
        return self.start_datetime().date()

    def relative(self) -> DaySubdivision:
        """Which slot of its day this period is."""
        first = Minutes.first_on_day(self.occurs_on_date(), self.length)
        return DaySubdivision(self.index - first.index, self.length)

    def __str__(self) -> str:
        start = self.start_datetime().strftime(_DATETIME_FORMAT)
        if self.length == 1:
            return start
        end = self.succ().start_datetime().strftime(_DATETIME_FORMAT)
        return f"{start}{_SEPARATOR}{end}"


@dataclass(frozen=True, order=True)
class DaySubdivision:
    """Position of a minute period within its day, independent of the date.

    ``offset`` is 0-based; ``number`` is the 1-based slot shown to humans.
    """

    offset: int
    length: int

    @classmethod
    def new(cls, number: int, length: int) -> DaySubdivision | None:
        """Slot from its 1-based number; None past the last slot of a day."""
        _validate_length(length)
        if number < 1 or number > MINUTES_PER_DAY // length:
            return None
        return cls(number - 1, length)

    @property
    def periods(self) -> int:
        """Number of slots in one day."""
        return MINUTES_PER_DAY // self.length

    @property
    def number(self) -> int:
        return self.offset + 1

    def on_date(self, d: date) -> Minutes:
        return Minutes.first_on_day(d, self.length).succ_n(self.offset)


def minutes_resolution(length: int) -> TimeResolution:
    """Resolution kind for periods of ``length`` minutes."""
    _validate_length(length)
    return TimeResolution(Minutes, length)


MINUTE = minutes_resolution(1)
FIVE_MINUTE = minutes_resolution(5)
HALF_HOUR = minutes_resolution(30)
HOUR = minutes_resolution(60)
