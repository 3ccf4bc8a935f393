"""Hypothesis property-based tests.

Properties that must hold for all valid inputs, verified by random generation.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from conftest import make_kind


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

_ALL_KINDS = [
    ("minute", None), ("five_minute", None), ("half_hour", None), ("hour", None),
    ("day", None), ("week", "monday"), ("week", "thursday"), ("week", "sunday"),
    ("month", None), ("quarter", None), ("year", None),
    ("hour@America/New_York", None), ("half_hour@Europe/London", None),
    ("five_minute@America/Havana", None),
]
_DATE_KINDS = [k for k in _ALL_KINDS if k[0] in ("day", "week", "month", "quarter", "year")]


def _kind_ids(kind_spec) -> str:
    name, start_day = kind_spec
    return name if start_day is None else f"{name}_{start_day}"


# Indices whose zoned wall-clock times stay inside datetime's range.
_indices = st.integers(min_value=-10**6, max_value=10**6)

# Dates whose surrounding periods stay inside datetime.date's range.
_dates = st.dates(min_value=date(1, 2, 1), max_value=date(9998, 12, 1))

_instants = st.datetimes(
    min_value=datetime(1900, 1, 1),
    max_value=datetime(2400, 1, 1),
    timezones=st.just(timezone.utc),
)

_index_sets = st.sets(st.integers(min_value=-50, max_value=50), max_size=40)


# ---------------------------------------------------------------------------
# Property: succ / pred are inverse
# ---------------------------------------------------------------------------
class TestSuccPredInverse:

    @pytest.mark.parametrize("kind_spec", _ALL_KINDS, ids=_kind_ids)
    @given(index=_indices, n=st.integers(min_value=0, max_value=1000))
    @settings(max_examples=50)
    def test_inverse(self, kind_spec, index, n):
        """pred(succ(p)) == p == succ(pred(p)), and n steps move n indices."""
        p = make_kind(*kind_spec).from_monotonic(index)
        assert p.succ().pred() == p
        assert p.pred().succ() == p
        assert p.succ_n(n).pred_n(n) == p
        assert p.between(p.succ_n(n)) == n
        assert p < p.succ() and p.pred() < p


# ---------------------------------------------------------------------------
# Property: a period contains the date / instant it was built from
# ---------------------------------------------------------------------------
class TestContainment:

    @pytest.mark.parametrize("kind_spec", _DATE_KINDS, ids=_kind_ids)
    @given(d=_dates)
    @settings(max_examples=50)
    def test_from_date_contains_date(self, kind_spec, d):
        p = make_kind(*kind_spec).from_date(d)
        assert p.start() <= d <= p.end()
        assert p.succ().start() > d

    @pytest.mark.parametrize("kind_spec", _ALL_KINDS, ids=_kind_ids)
    @given(dt=_instants)
    @settings(max_examples=50)
    def test_from_instant_contains_instant(self, kind_spec, dt):
        p = make_kind(*kind_spec).from_utc_datetime(dt)
        assert p.start_datetime() <= dt < p.succ().start_datetime()

    @pytest.mark.parametrize("kind_spec", _ALL_KINDS, ids=_kind_ids)
    @given(dt=_instants)
    @settings(max_examples=30)
    def test_start_instant_maps_back(self, kind_spec, dt):
        kind = make_kind(*kind_spec)
        p = kind.from_utc_datetime(dt)
        assert kind.from_utc_datetime(p.start_datetime()) == p


# ---------------------------------------------------------------------------
# Property: proleptic calendar arithmetic
# ---------------------------------------------------------------------------
class TestProlepticCalendar:

    @given(n=st.integers(min_value=-10**9, max_value=10**9))
    @settings(max_examples=200)
    def test_day_number_round_trip(self, n):
        from period_primitives.calendar import civil_from_days, days_from_civil

        y, m, d = civil_from_days(n)
        assert 1 <= m <= 12 and 1 <= d <= 31
        assert days_from_civil(y, m, d) == n

    @given(d=st.dates())
    @settings(max_examples=100)
    def test_agrees_with_datetime(self, d):
        from period_primitives.calendar import civil_from_days, day_number

        assert civil_from_days(day_number(d)) == (d.year, d.month, d.day)


# ---------------------------------------------------------------------------
# Property: range algebra
# ---------------------------------------------------------------------------
class TestRangeAlgebra:

    @given(indices=_index_sets)
    @settings(max_examples=50)
    def test_runs_partition_the_set(self, indices):
        from period_primitives.periods import DAY
        from period_primitives.range import TimeRange

        runs = TimeRange.from_sorted_index_set(indices, DAY)
        covered = [i for r in runs for i in r.to_indexes()]
        assert covered == sorted(indices)
        for before, after in zip(runs, runs[1:]):
            assert after.start.index > before.end.index + 1

    @given(
        a=st.tuples(st.integers(-100, 100), st.integers(1, 50)),
        b=st.tuples(st.integers(-100, 100), st.integers(1, 50)),
    )
    @settings(max_examples=100)
    def test_intersection_and_union(self, a, b):
        from period_primitives.periods import Day
        from period_primitives.range import TimeRange

        ra = TimeRange.new(Day(a[0]), a[1])
        rb = TimeRange.new(Day(b[0]), b[1])
        common = set(ra.to_indexes()) & set(rb.to_indexes())

        inter = ra.intersection(rb)
        assert inter == rb.intersection(ra)
        if inter is None:
            assert not common
            assert ra.union(rb) is None
        else:
            assert set(inter.to_indexes()) == common
            union = ra.union(rb)
            assert set(union.to_indexes()) == set(ra.to_indexes()) | set(rb.to_indexes())

    @given(start=st.integers(12 * 1000, 12 * 9000), length=st.integers(1, 36))
    @settings(max_examples=50)
    def test_month_day_round_trip(self, start, length):
        from period_primitives.periods import DAY, MONTH, Month
        from period_primitives.range import TimeRange

        months = TimeRange.new(Month(start), length)
        days = months.rescale_dates(DAY)
        assert sum(m.num_days() for m in months) == len(days)
        assert days.rescale(MONTH) == months


# ---------------------------------------------------------------------------
# Property: cache gap detection
# ---------------------------------------------------------------------------
class TestCacheGaps:

    @given(known=_index_sets, lo=st.integers(-60, 0), size=st.integers(0, 80))
    @settings(max_examples=50)
    def test_pieces_are_exactly_the_unknown_keys(self, known, lo, size):
        from period_primitives.cache import missing_pieces

        request = list(range(lo, lo + size))
        pieces = missing_pieces(request, known)
        assert [k for piece in pieces for k in piece] == [k for k in request if k not in known]
        assert all(piece for piece in pieces)

    @given(requests=st.lists(_index_sets, max_size=5), probe=_index_sets)
    @settings(max_examples=50)
    def test_hit_iff_everything_requested(self, requests, probe):
        from period_primitives.cache import Cache, CacheHit

        cache = Cache.empty()
        for request in requests:
            cache.add(request, {k: k for k in request})
        seen = set().union(*requests) if requests else set()
        assert isinstance(cache.get(probe), CacheHit) == probe.issubset(seen)
