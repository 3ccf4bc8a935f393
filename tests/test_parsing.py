"""Tests for the textual form of each resolution kind.

Test data loaded from: data/fixtures/scenarios/parsing.json
"""

from __future__ import annotations

import pytest

from conftest import d, load_scenarios, parse_period, utc

from period_primitives.minutes import Minutes
from period_primitives.periods import Week, Weekday
from period_primitives.types import ParseError, UnexpectedStartDateError

_data = load_scenarios("parsing")
ROUND_TRIPS = _data["round_trips"]
FAILURES = _data["failures"]
MINUTES = _data["minutes"]
MINUTES_FAILURES = _data["minutes_failures"]

_ERRORS = {
    "ParseError": ParseError,
    "UnexpectedStartDateError": UnexpectedStartDateError,
}


class TestDateLevelText:
    """parse / str for Day, Week, Month, Quarter and Year."""

    @pytest.mark.parametrize("case", ROUND_TRIPS, ids=lambda s: s["id"])
    def test_parse_start(self, case):
        assert parse_period(case).start() == d(case["start"])

    @pytest.mark.parametrize("case", ROUND_TRIPS, ids=lambda s: s["id"])
    def test_successor(self, case):
        assert parse_period(case).succ().start() == d(case["succ_start"])

    @pytest.mark.parametrize("case", ROUND_TRIPS, ids=lambda s: s["id"])
    def test_succ_then_pred(self, case):
        period = parse_period(case)
        assert period.succ().pred() == period
        assert period.succ().pred().start() == d(case["start"])

    @pytest.mark.parametrize("case", ROUND_TRIPS, ids=lambda s: s["id"])
    def test_display_round_trip(self, case):
        assert str(parse_period(case)) == case.get("display", case["text"])

    @pytest.mark.parametrize("case", FAILURES, ids=lambda s: s["id"])
    def test_rejected(self, case):
        with pytest.raises(_ERRORS[case["error"]]):
            parse_period(case)

    def test_week_mismatch_details(self):
        with pytest.raises(UnexpectedStartDateError) as exc_info:
            Week.parse("Week starting 2021-12-06", Weekday.TUESDAY)
        err = exc_info.value
        assert err.date == d("2021-12-06")
        assert err.required is Weekday.TUESDAY
        assert err.actual is Weekday.MONDAY
        assert "Monday" in str(err) and "Tuesday" in str(err)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError, match="Error parsing Month"):
            parse_period({"kind": "month", "text": "Foo-2021"})


class TestMinutesText:
    """parse / str for minute-multiple kinds."""

    @pytest.mark.parametrize("case", MINUTES, ids=lambda s: s["id"])
    def test_parse(self, case):
        p = Minutes.parse(case["text"], case["length"])
        assert p.length == case["length"]
        assert p.start_datetime() == utc(case["start_utc"])

    @pytest.mark.parametrize("case", MINUTES, ids=lambda s: s["id"])
    def test_display_round_trip(self, case):
        assert str(Minutes.parse(case["text"], case["length"])) == case["text"]

    @pytest.mark.parametrize("case", MINUTES_FAILURES, ids=lambda s: s["id"])
    def test_rejected(self, case):
        with pytest.raises(ParseError):
            Minutes.parse(case["text"], case["length"])
