"""Zoned: a period expressed in a named timezone's local wall-clock time.

The wrapped (inner) period indexes local wall-clock time as if it were UTC.
Two strategies map it back to an exact UTC instant:

- date-level inner kinds scan forward from local midnight one minute at a
  time until a wall-clock time that exists is found. Spring-forward gaps
  are skipped; fall-back ambiguity resolves to the earlier UTC instant.
- sub-date inner kinds capture the UTC offset once, when the value is
  built, and apply it directly. Stepping with ``succ``/``pred`` carries
  the captured offset along. A period must not straddle a transition.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Union
from zoneinfo import ZoneInfo

from period_primitives.calendar import MINUTES_PER_DAY, to_utc
from period_primitives.resolution import (
    DateResolution,
    Period,
    SubDateResolution,
    TimeResolution,
)

logger = logging.getLogger(__name__)

TimeZoneLike = Union[ZoneInfo, str]


def _as_zone(tz: TimeZoneLike) -> ZoneInfo:
    if isinstance(tz, ZoneInfo):
        return tz
    return ZoneInfo(tz)


def utc_candidates(wall: datetime, tz: ZoneInfo) -> list[datetime]:
    """Every UTC instant whose local time in ``tz`` reads ``wall``.

    Empty inside a spring-forward gap, two instants inside a fall-back
    overlap, one otherwise. Sorted ascending.
    """
    found: list[datetime] = []
    for fold in (0, 1):
        candidate = wall.replace(tzinfo=tz, fold=fold).astimezone(timezone.utc)
        if candidate.astimezone(tz).replace(tzinfo=None) != wall:
            continue
        if candidate not in found:
            found.append(candidate)
    found.sort()
    return found


def resolve_local_start(d: date, tz: ZoneInfo) -> datetime:
    """UTC instant at which calendar date ``d`` begins in ``tz``.

    Raises RuntimeError if no minute of the day exists locally, which no
    real timezone produces.
    """
    midnight = datetime.combine(d, time.min)
    for minute in range(MINUTES_PER_DAY):
        wall = midnight + timedelta(minutes=minute)
        candidates = utc_candidates(wall, tz)
        if not candidates:
            continue
        if minute:
            logger.debug(
                "%s: local %s skipped by a DST gap, day starts at %s",
                tz.key, midnight.isoformat(), wall.time().isoformat(),
            )
        if len(candidates) > 1:
            logger.debug(
                "%s: local %s is ambiguous, using earlier instant %s",
                tz.key, wall.isoformat(), candidates[0].isoformat(),
            )
        return candidates[0]
    raise RuntimeError(
        f"no local time on {d.isoformat()} exists in timezone {tz.key}"
    )


def wall_clock_offset(wall: datetime, tz: ZoneInfo) -> timedelta:
    """UTC offset for a local wall-clock time, earlier instant on overlap.

    Inside a gap the offset in force before the transition is used.
    """
    candidates = utc_candidates(wall, tz)
    if not candidates:
        logger.debug("%s: local %s falls in a DST gap", tz.key, wall.isoformat())
        return wall.replace(tzinfo=tz, fold=0).utcoffset()  # type: ignore[return-value]
    return wall.replace(tzinfo=timezone.utc) - candidates[0]


def _naive_wall(inner: Period) -> datetime:
    return inner.start_datetime().replace(tzinfo=None)


@dataclass(frozen=True)
class Zoned(Period):
    """An inner period in local time of ``tz``, plus its UTC offset.

    Build values with ``Zoned.wrap`` or ``Zoned.from_utc_datetime``; they
    return ``ZonedDate`` or ``ZonedSubDate`` depending on the inner kind.
    """

    inner: Period
    tz: ZoneInfo
    offset: timedelta

    @property
    def index(self) -> int:  # type: ignore[override]
        return self.inner.index

    @classmethod
    def wrap(cls, inner: Period, tz: TimeZoneLike) -> Zoned:
        """Qualify a local-time period with its timezone."""
        zone = _as_zone(tz)
        if isinstance(inner, DateResolution):
            start = resolve_local_start(inner.start(), zone)
            return ZonedDate(inner, zone, start.astimezone(zone).utcoffset())
        if isinstance(inner, SubDateResolution):
            return ZonedSubDate(inner, zone, wall_clock_offset(_naive_wall(inner), zone))
        raise TypeError(f"cannot zone a {type(inner).__name__}")

    @classmethod
    def from_monotonic(cls, index: int, params: Any = None) -> Zoned:
        inner_resolution, tz = params
        return Zoned.wrap(inner_resolution.from_monotonic(index), tz)

    @classmethod
    def from_utc_datetime(cls, dt: datetime, params: Any = None) -> Zoned:
        """The zoned period containing an instant, keeping its exact offset."""
        inner_resolution, tz = params
        zone = _as_zone(tz)
        local = to_utc(dt).astimezone(zone)
        inner = inner_resolution.from_utc_datetime(local.replace(tzinfo=timezone.utc))
        if isinstance(inner, SubDateResolution):
            return ZonedSubDate(inner, zone, local.utcoffset())
        return Zoned.wrap(inner, zone)

    @classmethod
    def unit_span_rank(cls, params: Any = None) -> int:
        inner_resolution, _ = params
        return inner_resolution.rank

    @classmethod
    def kind_name(cls, params: Any = None) -> str:
        inner_resolution, tz = params
        return f"Zoned[{inner_resolution.label}, {_as_zone(tz).key}]"

    def params(self) -> tuple[TimeResolution, ZoneInfo]:
        return (self.inner.resolution, self.tz)

    def local_resolution(self) -> Period:
        """The wrapped local wall-clock period."""
        return self.inner

    def local_datetime(self) -> datetime:
        """Start instant expressed in the zone's local time."""
        return self.start_datetime().astimezone(self.tz)

    def _sort_key(self) -> Any:
        # Same wall-clock index twice (fall-back): larger offset is earlier.
        return (self.index, -self.offset)

    def __str__(self) -> str:
        return f"{self.inner} {self.tz.key}"


@dataclass(frozen=True)
class ZonedDate(Zoned, DateResolution):
    """A zoned date-level period; its start is found by scanning."""

    @classmethod
    def from_date(cls, d: date, params: Any = None) -> Zoned:
        inner_resolution, tz = params
        return Zoned.wrap(inner_resolution.from_date(d), tz)

    def start(self) -> date:
        return self.inner.start()  # type: ignore[attr-defined]

    def end(self) -> date:
        return self.inner.end()  # type: ignore[attr-defined]

    def ymd(self) -> tuple[int, int, int]:
        return self.inner.ymd()  # type: ignore[attr-defined]

    def start_datetime(self) -> datetime:
        return resolve_local_start(self.start(), self.tz)


@dataclass(frozen=True)
class ZonedSubDate(Zoned, SubDateResolution):
    """A zoned sub-date period; its start applies the captured offset."""

    @classmethod
    def first_on_day(cls, d: date, params: Any = None) -> Zoned:
        inner_resolution, tz = params
        return Zoned.wrap(inner_resolution.first_on_day(d), tz)

    def occurs_on_date(self) -> date:
        return self.inner.occurs_on_date()  # type: ignore[attr-defined]

    def start_datetime(self) -> datetime:
        return self.inner.start_datetime() - self.offset

    def succ_n(self, n: int) -> ZonedSubDate:
        # Steps keep the snapshot so a walk stays contiguous in UTC.
        return ZonedSubDate(self.inner.succ_n(n), self.tz, self.offset)

    def pred_n(self, n: int) -> ZonedSubDate:
        return ZonedSubDate(self.inner.pred_n(n), self.tz, self.offset)


def zoned_resolution(inner: TimeResolution, tz: TimeZoneLike) -> TimeResolution:
    """Resolution kind for ``inner`` periods in local time of ``tz``."""
    zone = _as_zone(tz)
    period_type = ZonedDate if inner.is_date_level else ZonedSubDate
    return TimeResolution(period_type, (inner, zone))
