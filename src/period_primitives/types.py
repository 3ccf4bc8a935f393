"""Shared error types raised by resolutions, ranges and the cache."""

from __future__ import annotations

from datetime import date
from typing import Any


class EmptyRangeError(ValueError):
    """Raised when a range is built from no periods at all."""

    def __init__(self, detail: str = "no periods supplied") -> None:
        self.detail = detail
        super().__init__(
            f"Time range cannot be created from an empty set of periods "
            f"({detail})"
        )


class UnexpectedStartDateError(ValueError):
    """Raised when week text names a date on the wrong weekday."""

    def __init__(self, start_date: date, required: Any, actual: Any) -> None:
        self.date = start_date
        self.required = required
        self.actual = actual
        super().__init__(
            f"Unexpected start date {start_date.isoformat()}: "
            f"falls on {actual.label} but the week starts on {required.label}"
        )


class NonMatchingDataError(ValueError):
    """Raised by a strict cache when new data disagrees with cached data."""

    def __init__(self, point: Any, old: Any, new: Any) -> None:
        self.point = point
        self.old = old
        self.new = new
        super().__init__(
            f"Got new data for {point!r}: {new!r} different from data "
            f"already in the cache {old!r}"
        )


class ResolutionOrderError(TypeError):
    """Raised when an operation needs a longer (or equal) resolution kind.

    This is a programming error, not a runtime condition: the kinds involved
    are fixed by the calling code.
    """

    def __init__(self, operation: str, longer: Any, shorter: Any) -> None:
        self.operation = operation
        self.longer = longer
        self.shorter = shorter
        super().__init__(
            f"{operation} requires {longer.label} to span at least as long "
            f"as {shorter.label}"
        )


class ParseError(ValueError):
    """Raised when text does not match a resolution's display grammar."""

    def __init__(self, type_name: str, text: str, reason: str = "") -> None:
        self.type_name = type_name
        self.text = text
        self.reason = reason
        message = f"Error parsing {type_name} from input: {text!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
