"""Tests for the ASCII visualisation helpers."""

from __future__ import annotations

from datetime import date

from conftest import day, day_range

from period_primitives.debug import show_coverage, show_range
from period_primitives.minutes import HOUR
from period_primitives.periods import Day


class TestShowRange:
    def test_rows(self, capsys):
        out = show_range(day_range("2021-01-01", "2021-01-05"), per_row=2)
        lines = out.splitlines()
        assert lines[0] == "Day: 5 periods"
        assert lines[1].split() == ["0", "2021-01-01", "|", "2021-01-02"]
        assert lines[3].split() == ["4", "2021-01-05"]
        assert capsys.readouterr().out.strip() == out.strip()


class TestShowCoverage:
    def test_legend_marks(self, empty_cache, capsys):
        r = day_range("2021-01-01", "2021-01-06")
        empty_cache.add([day("2021-01-02").index, day("2021-01-03").index],
                        {day("2021-01-02").index: 1.0})
        out = show_coverage(empty_cache, r)
        first_row = out.splitlines()[0]
        assert first_row.strip().startswith("2021-01-01")
        assert first_row.endswith(".#-...")
        assert "(4 of 6)" in out
        capsys.readouterr()

    def test_wraps_rows(self, empty_cache, capsys):
        hours = Day.from_date(date(2021, 1, 1)).to_sub_date_resolution(HOUR)
        out = show_coverage(empty_cache, hours, per_row=12)
        rows = [line for line in out.splitlines() if line.endswith("." * 12)]
        assert len(rows) == 2
        assert "(24 of 24)" in out
        capsys.readouterr()
