"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from period_primitives.cache import Cache
from period_primitives.range import TimeRange


def show_range(time_range: TimeRange, per_row: int = 12) -> str:
    """Print the periods of a range, ``per_row`` to a line.

    Each line is labelled with the position of its first period.
    Returns the string and also prints to stdout.
    """
    lines: list[str] = [f"{time_range.resolution.label}: {len(time_range)} periods"]

    row: list[str] = []
    for position, period in enumerate(time_range):
        row.append(str(period))
        if len(row) == per_row:
            lines.append(f"{position - per_row + 1:>6d}  {' | '.join(row)}")
            row = []
    if row:
        lines.append(f"{len(time_range) - len(row):>6d}  {' | '.join(row)}")

    result = "\n".join(lines)
    print(result)
    return result


def show_coverage(cache: Cache, time_range: TimeRange, per_row: int = 48) -> str:
    """Print which periods of a range the cache can already answer.

    Legend: '#' = requested with data, '-' = requested without data,
    '.' = never requested (would be fetched).
    Each row starts with its first period. Returns the string and also
    prints to stdout.
    """
    known = cache.known_requests
    # Only already-requested keys, so this is always a hit.
    data = cache.get([k for k in time_range.to_indexes() if k in known]).data

    lines: list[str] = []
    row: list[str] = []
    row_label = ""

    for period in time_range:
        key = period.to_monotonic()
        if not row:
            row_label = str(period)
        if key in data:
            row.append("#")
        elif key in known:
            row.append("-")
        else:
            row.append(".")
        if len(row) == per_row:
            lines.append(f"{row_label:>24s}  {''.join(row)}")
            row = []
    if row:
        lines.append(f"{row_label:>24s}  {''.join(row)}")

    missing = sum(1 for k in time_range.to_indexes() if k not in known)
    lines.append(
        f"\nLegend: # = cached, - = requested without data, . = missing "
        f"({missing} of {len(time_range)})"
    )

    result = "\n".join(lines)
    print(result)
    return result
