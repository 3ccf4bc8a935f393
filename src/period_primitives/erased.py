"""Formatting for periods stored as bare ``(kind tag, index)`` pairs.

Storage layers often keep only a period's monotonic index next to a tag
naming its kind. This module renders such pairs for the kinds the package
defines and hands everything else back to the caller.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable

from period_primitives.minutes import FIVE_MINUTE, HALF_HOUR, HOUR, MINUTE
from period_primitives.periods import DAY, MONTH, QUARTER, YEAR, Weekday, week_resolution
from period_primitives.resolution import TimeResolution


class ResolutionTag(Enum):
    """Closed set of kinds ``format_erased_resolution`` knows how to render."""

    MINUTE = "minute"
    FIVE_MINUTE = "five_minute"
    HALF_HOUR = "half_hour"
    HOUR = "hour"
    DAY = "day"
    WEEK_MONDAY = "week_monday"
    WEEK_TUESDAY = "week_tuesday"
    WEEK_WEDNESDAY = "week_wednesday"
    WEEK_THURSDAY = "week_thursday"
    WEEK_FRIDAY = "week_friday"
    WEEK_SATURDAY = "week_saturday"
    WEEK_SUNDAY = "week_sunday"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def resolution(self) -> TimeResolution:
        return _TAGGED[self][1]

    @property
    def display_name(self) -> str:
        return _TAGGED[self][0]

    @classmethod
    def for_resolution(cls, resolution: TimeResolution) -> ResolutionTag | None:
        """Tag of a known kind, None for any other kind."""
        for tag, (_, known) in _TAGGED.items():
            if known == resolution:
                return tag
        return None


_TAGGED: dict[ResolutionTag, tuple[str, TimeResolution]] = {
    ResolutionTag.MINUTE: ("Minute", MINUTE),
    ResolutionTag.FIVE_MINUTE: ("FiveMinute", FIVE_MINUTE),
    ResolutionTag.HALF_HOUR: ("HalfHour", HALF_HOUR),
    ResolutionTag.HOUR: ("Hour", HOUR),
    ResolutionTag.DAY: ("Day", DAY),
    ResolutionTag.WEEK_MONDAY: ("Week", week_resolution(Weekday.MONDAY)),
    ResolutionTag.WEEK_TUESDAY: ("Week", week_resolution(Weekday.TUESDAY)),
    ResolutionTag.WEEK_WEDNESDAY: ("Week", week_resolution(Weekday.WEDNESDAY)),
    ResolutionTag.WEEK_THURSDAY: ("Week", week_resolution(Weekday.THURSDAY)),
    ResolutionTag.WEEK_FRIDAY: ("Week", week_resolution(Weekday.FRIDAY)),
    ResolutionTag.WEEK_SATURDAY: ("Week", week_resolution(Weekday.SATURDAY)),
    ResolutionTag.WEEK_SUNDAY: ("Week", week_resolution(Weekday.SUNDAY)),
    ResolutionTag.MONTH: ("Month", MONTH),
    ResolutionTag.QUARTER: ("Quarter", QUARTER),
    ResolutionTag.YEAR: ("Year", YEAR),
}


def format_erased_resolution(
    handle_unknown: Callable[[Any, int], str],
    tag: Any,
    index: int,
) -> str:
    """Render ``index`` as ``"<Name>:<text>"`` for a known tag.

    ``tag`` may be a ResolutionTag or a TimeResolution of a known kind.
    Any other tag is passed, with the index, to ``handle_unknown``.

    >>> format_erased_resolution(repr, ResolutionTag.DAY, 738156)
    'Day:2021-01-01'
    """
    known = tag if isinstance(tag, ResolutionTag) else None
    if known is None and isinstance(tag, TimeResolution):
        known = ResolutionTag.for_resolution(tag)
    if known is None:
        return handle_unknown(tag, index)

    name, resolution = _TAGGED[known]
    return f"{name}:{resolution.from_monotonic(index)}"
