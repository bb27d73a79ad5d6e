"""Tests for exercise frequency parsing."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from spine.domain.models import Period
from spine.services.frequency import parse_frequency


class TestRecognisedFormats:
    def test_daily(self) -> None:
        parsed = parse_frequency("daily")
        assert (parsed.target, parsed.period) == (1, Period.DAILY)

    @given(n=st.integers(min_value=1, max_value=500))
    def test_times_per_day(self, n: int) -> None:
        parsed = parse_frequency(f"{n}x/day")
        assert (parsed.target, parsed.period) == (n, Period.DAILY)

    @given(n=st.integers(min_value=1, max_value=500))
    def test_times_per_week(self, n: int) -> None:
        parsed = parse_frequency(f"{n}x/week")
        assert (parsed.target, parsed.period) == (n, Period.WEEKLY)

    @pytest.mark.parametrize("text", ["  DAILY ", "Daily", "daily\t"])
    def test_case_and_whitespace_insensitive(self, text: str) -> None:
        assert parse_frequency(text).target == 1
        assert parse_frequency(text).period == Period.DAILY

    def test_upper_case_weekly(self) -> None:
        parsed = parse_frequency(" 3X/WEEK ")
        assert (parsed.target, parsed.period) == (3, Period.WEEKLY)

    @pytest.mark.parametrize(
        "text,target,period",
        [
            ("2x/day twice", 2, Period.DAILY),
            ("4x/week (gym days)", 4, Period.WEEKLY),
        ],
    )
    def test_trailing_text_after_count(self, text: str, target: int, period: Period) -> None:
        parsed = parse_frequency(text)
        assert (parsed.target, parsed.period) == (target, period)


class TestFallbacks:
    @pytest.mark.parametrize("text", ["abcx/day", "x/day", "2 x/day", "0x/day", "-2x/day"])
    def test_bad_daily_count_means_once_a_day(self, text: str) -> None:
        parsed = parse_frequency(text)
        assert (parsed.target, parsed.period) == (1, Period.DAILY)

    @pytest.mark.parametrize("text", ["fewx/week", "x/week", "0x/week"])
    def test_bad_weekly_count_keeps_weekly_period(self, text: str) -> None:
        parsed = parse_frequency(text)
        assert (parsed.target, parsed.period) == (1, Period.WEEKLY)

    @given(
        text=st.text(max_size=30).filter(
            lambda s: "/day" not in s.lower() and "/week" not in s.lower()
        )
    )
    def test_unrecognised_text_is_once_a_day(self, text: str) -> None:
        parsed = parse_frequency(text)
        assert (parsed.target, parsed.period) == (1, Period.DAILY)

    @given(text=st.text(max_size=40))
    def test_parser_is_total(self, text: str) -> None:
        parsed = parse_frequency(text)
        assert parsed.target >= 1
        assert parsed.period in (Period.DAILY, Period.WEEKLY)

    def test_empty_string(self) -> None:
        assert parse_frequency("").period == Period.DAILY
