#!/usr/bin/env python
"""Visual verification report for period-primitives.

Run:  uv run python scripts/verify.py

Produces a formatted report showing:
  1. Reference data (epochs of every kind, as indices and calendar values)
  2. Text round trips (parse -> start -> successor)
  3. Range algebra (intersection / union tables, 2024 rescale lengths)
  4. Cache gap detection (missing pieces + ASCII coverage)
  5. Zoned day starts across DST transitions
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))
sys.path.insert(0, str(ROOT / "tests"))

from conftest import make_kind, parse_period
from period_primitives.cache import Cache, missing_pieces
from period_primitives.debug import show_coverage, show_range
from period_primitives.periods import DAY, Day, Year
from period_primitives.range import TimeRange
from period_primitives.types import ParseError, UnexpectedStartDateError
from period_primitives.zoned import zoned_resolution


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _ok(flag: bool) -> str:
    return "OK" if flag else "FAIL"


def _day_range(bounds: list[str] | None) -> TimeRange | None:
    if bounds is None:
        return None
    return TimeRange.from_bounds(
        Day.from_date(date.fromisoformat(bounds[0])),
        Day.from_date(date.fromisoformat(bounds[1])),
    )


def _fmt_range(r: TimeRange | None) -> str:
    return "(none)" if r is None else f"{r.start} .. {r.end}"


# ---------------------------------------------------------------------------
# Section 1: Reference Data
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE DATA")
    print(f"\n    Unix epoch:     {_ref['unix_epoch']}  (minute kinds, index 0)")
    print("    Day epoch:      0000-01-01  (proleptic, year 0 is a leap year)")
    print(f"    Minutes/day:    {_ref['minutes_per_day']}")

    heading("Date-level epochs: from_monotonic(index).ymd()")
    rows = []
    for s in _ref["date_epochs"]:
        p = make_kind(s["kind"], s.get("start_day")).from_monotonic(s["index"])
        rows.append([
            s["id"], str(s["index"]), str(p.ymd()), str(p),
            _ok(p.ymd() == tuple(s["ymd"]) and str(p) == s["display"]),
        ])
    table(["ID", "Index", "(y, m, d)", "Display", ""], rows)

    heading("Sub-date epochs: from_monotonic(index).start_datetime()")
    rows = []
    for s in _ref["instant_epochs"]:
        p = make_kind(s["kind"]).from_monotonic(s["index"])
        expected = datetime.fromisoformat(s["utc"])
        rows.append([
            s["id"], str(s["index"]), p.start_datetime().isoformat(),
            _ok(p.start_datetime() == expected),
        ])
    table(["ID", "Index", "Start (UTC)", ""], rows)


# ---------------------------------------------------------------------------
# Section 2: Text round trips
# ---------------------------------------------------------------------------
def section_parsing():
    banner("TEXT ROUND TRIPS")
    data = _load(SCENARIOS / "parsing.json")

    heading("parse(text) -> start(), succ().start(), str()")
    rows = []
    for s in data["round_trips"]:
        p = parse_period(s)
        ok = (p.start() == date.fromisoformat(s["start"])
              and p.succ().start() == date.fromisoformat(s["succ_start"])
              and str(p) == s.get("display", s["text"]))
        rows.append([s["id"], s["text"], p.start().isoformat(),
                     p.succ().start().isoformat(), str(p), _ok(ok)])
    table(["ID", "Text", "Start", "Succ start", "Display", ""], rows)

    heading("Rejected text")
    rows = []
    for s in data["failures"]:
        try:
            parse_period(s)
            err = "NO ERROR"
            match = "FAIL"
        except (ParseError, UnexpectedStartDateError) as e:
            err = type(e).__name__
            match = _ok(err == s["error"])
        rows.append([s["id"], s["text"], err, match])
    table(["ID", "Text", "Error", ""], rows)


# ---------------------------------------------------------------------------
# Section 3: Range algebra
# ---------------------------------------------------------------------------
def section_ranges():
    banner("RANGE ALGEBRA")
    data = _load(SCENARIOS / "ranges.json")

    heading("intersection(a, b) / union(a, b)  -- adjacent ranges never merge")
    rows = []
    for s in data["pairs"]:
        a, b = _day_range(s["a"]), _day_range(s["b"])
        inter, union = a.intersection(b), a.union(b)
        ok = inter == _day_range(s["intersection"]) and union == _day_range(s["union"])
        rows.append([s["id"], _fmt_range(a), _fmt_range(b),
                     _fmt_range(inter), _fmt_range(union), _ok(ok)])
    table(["ID", "A", "B", "A & B", "A | B", ""], rows)

    heading("Year 2024 rescaled, and back")
    year = TimeRange.new(Year(2024), 1)
    rows = []
    for s in data["year_2024_rescale"]:
        rescaled = year.rescale(make_kind(s["target"]))
        back = rescaled.rescale(make_kind("year"))
        rows.append([s["target"], str(len(rescaled)), str(s["expected_length"]),
                     _fmt_range(back),
                     _ok(len(rescaled) == s["expected_length"] and back == year)])
    table(["Target", "Length", "Expected", "Back to year", ""], rows)

    heading("from_sorted_index_set(indices, DAY)")
    rows = []
    for s in data["index_runs"]:
        runs = TimeRange.from_sorted_index_set(s["indices"], DAY)
        actual = [[r.start.index, r.length] for r in runs]
        rows.append([s["id"], str(s["indices"]), str(actual), _ok(actual == s["expected"])])
    table(["ID", "Indices", "Runs [start, length]", ""], rows)

    print()
    show_range(TimeRange.new(Day.from_date(date(2024, 2, 26)), 8), per_row=4)


# ---------------------------------------------------------------------------
# Section 4: Cache
# ---------------------------------------------------------------------------
def section_cache():
    banner("CACHE GAP DETECTION")
    data = _load(SCENARIOS / "cache.json")

    heading("missing_pieces(request, known)")
    rows = []
    for s in data["missing_pieces"]:
        pieces = missing_pieces(s["request"], s["known"])
        rows.append([s["id"], str(s["known"]), str(pieces), _ok(pieces == s["expected"])])
    table(["ID", "Known", "Pieces", ""], rows)

    heading("Coverage of January 2024 after two partial fetches")
    cache = Cache.empty()
    first_week = TimeRange.new(Day.from_date(date(2024, 1, 1)), 7)
    mid_month = TimeRange.new(Day.from_date(date(2024, 1, 15)), 5)
    cache.add(first_week.to_indexes(), {k: 1.0 for k in first_week.to_indexes()[::2]})
    cache.add(mid_month.to_indexes(), {k: 2.0 for k in mid_month.to_indexes()})
    print()
    show_coverage(cache, TimeRange.new(Day.from_date(date(2024, 1, 1)), 31), per_row=31)


# ---------------------------------------------------------------------------
# Section 5: Zoned
# ---------------------------------------------------------------------------
def section_zoned():
    banner("ZONED DAY STARTS ACROSS DST")
    data = _load(SCENARIOS / "zoned.json")

    heading("zoned(DAY, tz).from_date(d).start_datetime()")
    rows = []
    for s in data["day_starts"]:
        tz = ZoneInfo(s["tz"])
        p = zoned_resolution(DAY, tz).from_date(date.fromisoformat(s["date"]))
        start = p.start_datetime()
        rows.append([
            s["id"], s["date"], start.isoformat(),
            p.local_datetime().strftime("%H:%M %Z"),
            _ok(start == datetime.fromisoformat(s["expected_utc"])),
        ])
    table(["ID", "Date", "Start (UTC)", "Local", ""], rows)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    banner("PERIOD-PRIMITIVES   --  VISUAL VERIFICATION REPORT")
    print(f"    Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
    print(f"    Fixture data: {FIXTURES.relative_to(ROOT)}/")

    section_reference()
    section_parsing()
    section_ranges()
    section_cache()
    section_zoned()

    banner("END OF REPORT")
    print()


if __name__ == "__main__":
    main()
