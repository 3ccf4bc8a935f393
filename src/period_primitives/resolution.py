"""Boundary: Period values, resolution kinds and the kind ordering.

Every period is an integer index within its kind's ordered sequence.
All engine arithmetic (successor, distance, range length) uses that index;
calendar dates and UTC instants only appear at the boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from period_primitives.calendar import MINUTES_PER_DAY, midnight_utc, to_utc
from period_primitives.types import ResolutionOrderError

if TYPE_CHECKING:
    from period_primitives.minutes import Minutes
    from period_primitives.periods import Day, Month, Year
    from period_primitives.range import TimeRange

P = TypeVar("P", bound="Period")


class Period:
    """One period of a resolution kind. Immutable.

    Concrete kinds are frozen dataclasses whose ``index`` is the monotonic
    index. Periods of the same kind are totally ordered by index; comparing
    periods of different kinds raises TypeError.
    """

    index: int

    # Unit span in minutes, used only to order kinds against each other.
    SPAN_RANK: ClassVar[int] = 0

    @classmethod
    def from_monotonic(cls: type[P], index: int, params: Any = None) -> P:
        """Rebuild a period from its monotonic index."""
        return cls(index)  # type: ignore[call-arg]

    @classmethod
    def from_utc_datetime(cls: type[P], dt: datetime, params: Any = None) -> P:
        """The period containing an aware instant. Overridden per kind."""
        raise NotImplementedError

    @classmethod
    def unit_span_rank(cls, params: Any = None) -> int:
        return cls.SPAN_RANK

    @classmethod
    def kind_name(cls, params: Any = None) -> str:
        return cls.__name__

    def params(self) -> Any:
        """Configuration needed to rebuild this period from an index."""
        return None

    def name(self) -> str:
        return type(self).kind_name(self.params())

    def start_datetime(self) -> datetime:
        """Exact UTC instant at which the period begins. Overridden per kind."""
        raise NotImplementedError

    @property
    def resolution(self) -> TimeResolution:
        return TimeResolution(type(self), self.params())

    # ------------------------------------------------------------------
    # Monotonic index
    # ------------------------------------------------------------------

    def to_monotonic(self) -> int:
        return self.index

    def between(self: P, other: P) -> int:
        """Signed index distance from self to other."""
        self._require_same_kind(other)
        return other.index - self.index

    def succ_n(self: P, n: int) -> P:
        if n < 0:
            raise ValueError(f"succ_n needs n >= 0, got {n}")
        return type(self).from_monotonic(self.index + n, self.params())

    def pred_n(self: P, n: int) -> P:
        if n < 0:
            raise ValueError(f"pred_n needs n >= 0, got {n}")
        return type(self).from_monotonic(self.index - n, self.params())

    def succ(self: P) -> P:
        return self.succ_n(1)

    def pred(self: P) -> P:
        return self.pred_n(1)

    # ------------------------------------------------------------------
    # Conversion: always through the start instant
    # ------------------------------------------------------------------

    def convert(self, target: TimeResolution) -> Period:
        """The target-kind period containing this period's start instant."""
        return target.from_utc_datetime(self.start_datetime())

    def five_minute(self) -> Minutes:
        from period_primitives.minutes import FIVE_MINUTE

        return self.convert(FIVE_MINUTE)  # type: ignore[return-value]

    def half_hour(self) -> Minutes:
        from period_primitives.minutes import HALF_HOUR

        return self.convert(HALF_HOUR)  # type: ignore[return-value]

    def hour(self) -> Minutes:
        from period_primitives.minutes import HOUR

        return self.convert(HOUR)  # type: ignore[return-value]

    def day(self) -> Day:
        from period_primitives.periods import DAY

        return self.convert(DAY)  # type: ignore[return-value]

    def month(self) -> Month:
        from period_primitives.periods import MONTH

        return self.convert(MONTH)  # type: ignore[return-value]

    def year(self) -> Year:
        from period_primitives.periods import YEAR

        return self.convert(YEAR)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def _sort_key(self) -> Any:
        return self.index

    def _require_same_kind(self, other: Period) -> None:
        if self.resolution != other.resolution:
            raise TypeError(
                f"cannot compare {self.name()} with {other.name()}"
            )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        self._require_same_kind(other)
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        self._require_same_kind(other)
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        self._require_same_kind(other)
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Period):
            return NotImplemented
        self._require_same_kind(other)
        return self._sort_key() >= other._sort_key()


class DateResolution(Period):
    """Kinds spanning one or more whole days."""

    @classmethod
    def from_date(cls: type[P], d: date, params: Any = None) -> P:
        """The period containing a calendar date. Overridden per kind."""
        raise NotImplementedError

    @classmethod
    def from_utc_datetime(cls: type[P], dt: datetime, params: Any = None) -> P:
        return cls.from_date(to_utc(dt).date(), params)  # type: ignore[attr-defined]

    def start(self) -> date:
        """First calendar date of the period. Overridden per kind."""
        raise NotImplementedError

    def ymd(self) -> tuple[int, int, int]:
        """Proleptic (year, month, day) of the first date, for any index.

        Overridden per kind.
        """
        raise NotImplementedError

    def end(self) -> date:
        """Last calendar date of the period."""
        return self.succ().start() - timedelta(days=1)

    def num_days(self) -> int:
        return (self.end() - self.start()).days + 1

    def start_datetime(self) -> datetime:
        return midnight_utc(self.start())

    def rescale(self, target: TimeResolution) -> TimeRange:
        """This period as a range of a shorter (or equal) date-level kind."""
        from period_primitives.range import TimeRange

        require_longer_or_equal("rescale", self.resolution, target)
        return TimeRange.from_bounds(
            target.from_date(self.start()),
            target.from_date(self.end()),
        )

    def to_sub_date_resolution(self, target: TimeResolution) -> TimeRange:
        """Every sub-date period from the first to the last day covered."""
        from period_primitives.range import TimeRange

        return TimeRange.from_bounds(
            target.first_on_day(self.start()),
            target.last_on_day(self.end()),
        )


class SubDateResolution(Period):
    """Kinds spanning strictly less than one day."""

    def occurs_on_date(self) -> date:
        """Calendar date the period starts on. Overridden per kind."""
        raise NotImplementedError

    @classmethod
    def first_on_day(cls: type[P], d: date, params: Any = None) -> P:
        """The first period starting on a calendar date. Overridden per kind."""
        raise NotImplementedError

    @classmethod
    def last_on_day(cls: type[P], d: date, params: Any = None) -> P:
        """The last period starting on a calendar date."""
        return cls.first_on_day(d + timedelta(days=1), params).pred()  # type: ignore[attr-defined]


@dataclass(frozen=True)
class TimeResolution:
    """A resolution kind plus its configuration. Immutable.

    Used wherever a target kind must be named: conversions, rescaling and
    rebuilding periods from raw indices.
    """

    period_type: type[Period]
    params: Any = None

    @property
    def label(self) -> str:
        return self.period_type.kind_name(self.params)

    @property
    def rank(self) -> int:
        """Unit span in minutes; orders kinds against each other."""
        return self.period_type.unit_span_rank(self.params)

    @property
    def is_date_level(self) -> bool:
        return issubclass(self.period_type, DateResolution)

    @property
    def is_sub_date_level(self) -> bool:
        return issubclass(self.period_type, SubDateResolution)

    def longer_than_or_equal(self, other: TimeResolution) -> bool:
        return self.rank >= other.rank

    def longer_than(self, other: TimeResolution) -> bool:
        return self.rank > other.rank

    def from_monotonic(self, index: int) -> Period:
        return self.period_type.from_monotonic(index, self.params)

    def from_utc_datetime(self, dt: datetime) -> Period:
        return self.period_type.from_utc_datetime(dt, self.params)

    def from_date(self, d: date) -> Period:
        if not self.is_date_level:
            raise TypeError(f"{self.label} is not a date-level resolution")
        return self.period_type.from_date(d, self.params)  # type: ignore[attr-defined]

    def first_on_day(self, d: date) -> Period:
        if not self.is_sub_date_level:
            raise TypeError(f"{self.label} is not a sub-date resolution")
        return self.period_type.first_on_day(d, self.params)  # type: ignore[attr-defined]

    def last_on_day(self, d: date) -> Period:
        if not self.is_sub_date_level:
            raise TypeError(f"{self.label} is not a sub-date resolution")
        return self.period_type.last_on_day(d, self.params)  # type: ignore[attr-defined]


def require_longer_or_equal(
    operation: str, longer: TimeResolution, shorter: TimeResolution
) -> None:
    """Fail fast when ``longer`` spans less than ``shorter``."""
    if not longer.longer_than_or_equal(shorter):
        raise ResolutionOrderError(operation, longer, shorter)


# Unit span ranks in minutes. A month is ranked by its shortest length,
# a quarter and a year likewise; only the relative order matters.
DAY_RANK = MINUTES_PER_DAY
WEEK_RANK = 7 * MINUTES_PER_DAY
MONTH_RANK = 28 * MINUTES_PER_DAY
QUARTER_RANK = 89 * MINUTES_PER_DAY
YEAR_RANK = 365 * MINUTES_PER_DAY
