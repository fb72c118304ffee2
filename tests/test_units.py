"""Tests for timescale annualization multipliers."""

import pytest

from impact_engine.engine.units import (
    WORK_DAYS_PER_YEAR,
    WORK_HOURS_PER_YEAR,
    WORK_WEEKS_PER_YEAR,
    is_one_time,
    timescale_multiplier,
)


class TestTimescaleMultiplier:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("hour", 1880),
            ("timme", 1880),
            ("day", 235),
            ("dag", 235),
            ("week", 47),
            ("vecka", 47),
            ("per_week", 47),
            ("month", 12),
            ("månad", 12),
            ("per_month", 12),
            ("year", 1),
            ("år", 1),
            ("per_year", 1),
            ("one_time", 1),
        ],
    )
    def test_known_tokens(self, token, expected):
        assert timescale_multiplier(token) == expected

    def test_case_insensitive(self):
        assert timescale_multiplier("Per_Month") == 12
        assert timescale_multiplier("WEEK") == 47

    def test_unknown_token_is_one(self):
        assert timescale_multiplier("fortnight") == 1

    def test_per_day_is_not_in_table(self):
        """Only the bare 'day' token carries the working-day factor."""
        assert timescale_multiplier("per_day") == 1

    def test_empty_and_none_are_one(self):
        assert timescale_multiplier("") == 1
        assert timescale_multiplier(None) == 1

    def test_working_time_constants_are_consistent(self):
        assert WORK_WEEKS_PER_YEAR == 47
        assert WORK_DAYS_PER_YEAR == 5 * WORK_WEEKS_PER_YEAR
        assert WORK_HOURS_PER_YEAR == 40 * WORK_WEEKS_PER_YEAR


class TestOneTime:
    def test_one_time_detected(self):
        assert is_one_time("one_time")
        assert is_one_time(" ONE_TIME ")

    def test_other_tokens_are_recurring(self):
        assert not is_one_time("per_year")
        assert not is_one_time(None)
