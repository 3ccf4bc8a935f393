"""Layer 2: TimeRange — a contiguous run of periods of one kind.

A range is ``start`` plus a positive ``length``; ``end`` is derived.
Every operation works on monotonic indices or on start instants, so it
applies unchanged to every resolution kind.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, TypeVar

from period_primitives.resolution import (
    DateResolution,
    Period,
    TimeResolution,
    require_longer_or_equal,
)
from period_primitives.types import EmptyRangeError

P = TypeVar("P", bound=Period)


@dataclass(frozen=True)
class TimeRange(Generic[P]):
    """Immutable contiguous span ``start .. end`` inclusive.

    Invariants:
        - length >= 1
        - end == start.succ_n(length - 1)
    """

    start: P
    length: int

    def __post_init__(self) -> None:
        if self.length < 1:
            raise EmptyRangeError(f"length {self.length}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, start: P, length: int) -> TimeRange[P]:
        return cls(start, length)

    @classmethod
    def maybe_new(cls, start: P, length: int) -> TimeRange[P] | None:
        """Like ``new`` but returns None instead of raising for length < 1."""
        if length < 1:
            return None
        return cls(start, length)

    @classmethod
    def from_bounds(cls, a: P, b: P) -> TimeRange[P]:
        """Range from the lower to the higher of two periods, inclusive."""
        lower, upper = (a, b) if a <= b else (b, a)
        return cls(lower, 1 + lower.between(upper))

    @classmethod
    def from_set(cls, periods: Iterable[P]) -> TimeRange[P]:
        """Range covering a contiguous collection of periods.

        The collection is assumed contiguous: the range starts at the
        smallest period and its length is the number of distinct periods.
        Raises EmptyRangeError for an empty collection.
        """
        unique = sorted(set(periods))
        if not unique:
            raise EmptyRangeError()
        return cls(unique[0], len(unique))

    @classmethod
    def from_sorted_index_set(
        cls, indices: Iterable[int], resolution: TimeResolution
    ) -> list[TimeRange]:
        """Partition raw indices into maximal contiguous runs, ascending.

        Duplicates are ignored; an empty input gives an empty list.
        """
        ranges: list[TimeRange] = []
        run_start: int | None = None
        prev = 0

        for idx in sorted(set(indices)):
            if run_start is None:
                run_start = idx
            elif idx != prev + 1:
                ranges.append(
                    cls(resolution.from_monotonic(run_start), prev - run_start + 1)
                )
                run_start = idx
            prev = idx

        if run_start is not None:
            ranges.append(
                cls(resolution.from_monotonic(run_start), prev - run_start + 1)
            )
        return ranges

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def end(self) -> P:
        """Last period in the range (inclusive)."""
        return self.start.succ_n(self.length - 1)

    @property
    def resolution(self) -> TimeResolution:
        return self.start.resolution

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[P]:
        """Walk start .. end. Each call starts a fresh walk."""
        current = self.start
        for _ in range(self.length):
            yield current
            current = current.succ()

    def iter(self) -> Iterator[P]:
        return iter(self)

    def index_of(self, point: P) -> int | None:
        """0-based position of ``point`` in the range, None if outside."""
        if point < self.start or point > self.end:
            return None
        return self.start.between(point)

    def to_indexes(self) -> list[int]:
        """Monotonic indices of every period, ascending."""
        first = self.start.to_monotonic()
        return list(range(first, first + self.length))

    def periods(self) -> list[P]:
        return list(self)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def intersection(self, other: TimeRange[P]) -> TimeRange[P] | None:
        """Overlap of two ranges, None if they share no period."""
        max_start = max(self.start, other.start)
        min_end = min(self.end, other.end)
        if max_start <= min_end:
            return TimeRange.from_bounds(max_start, min_end)
        return None

    def union(self, other: TimeRange[P]) -> TimeRange[P] | None:
        """Span of two overlapping ranges.

        None unless the ranges share at least one period: ranges that only
        touch end-to-start are not merged.
        """
        if self.intersection(other) is None:
            return None
        return TimeRange.from_bounds(
            min(self.start, other.start), max(self.end, other.end)
        )

    def contains(self, period: Period) -> bool:
        """Whether ``period`` lies wholly inside the range, by instants.

        Raises ResolutionOrderError if the range's kind is shorter than the
        period's kind.
        """
        require_longer_or_equal("contains", self.resolution, period.resolution)

        range_start = self.start.start_datetime()
        range_end = self.end.succ().start_datetime()
        period_start = period.start_datetime()
        period_end = period.succ().start_datetime()

        return range_start <= period_start and period_end <= range_end

    # ------------------------------------------------------------------
    # Rescaling
    # ------------------------------------------------------------------

    def rescale(self, target: TimeResolution) -> TimeRange:
        """Same span in another kind, mapped through start instants.

        Exact when the range's boundaries fall on target boundaries.
        Otherwise the start floors to the target period containing it and
        a partially covered last target period is dropped.

        Raises EmptyRangeError when no target period ends inside the range,
        e.g. a single hour rescaled to days.
        """
        out_start = target.from_utc_datetime(self.start.start_datetime())
        out_end = target.from_utc_datetime(self.end.succ().start_datetime()).pred()
        if out_end < out_start:
            raise EmptyRangeError(f"{self} is shorter than one {target.label}")
        return TimeRange.from_bounds(out_start, out_end)

    def rescale_dates(self, target: TimeResolution) -> TimeRange:
        """Date-level to shorter (or equal) date-level, via calendar dates."""
        first, last = self._date_bounds()
        require_longer_or_equal("rescale_dates", self.resolution, target)
        return TimeRange.from_bounds(
            target.from_date(first.start()), target.from_date(last.end())
        )

    def to_sub_date_resolution(self, target: TimeResolution) -> TimeRange:
        """Every sub-date period from the first to the last day covered."""
        first, last = self._date_bounds()
        return TimeRange.from_bounds(
            target.first_on_day(first.start()), target.last_on_day(last.end())
        )

    def _date_bounds(self) -> tuple[DateResolution, DateResolution]:
        if not isinstance(self.start, DateResolution):
            raise TypeError(f"{self.start.name()} is not a date-level resolution")
        return self.start, self.end  # type: ignore[return-value]

    def local(self) -> TimeRange:
        """For zoned ranges: the same span in local wall-clock periods."""
        return TimeRange(self.start.local_resolution(), self.length)  # type: ignore[attr-defined]

    def __str__(self) -> str:
        return f"{self.start} .. {self.end} ({self.length} x {self.start.name()})"
