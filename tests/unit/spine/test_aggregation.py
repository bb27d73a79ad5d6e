"""Tests for pain summaries, daily averages, breakdowns and compliance."""

from datetime import UTC, date, datetime, timedelta

import pytest
from hypothesis import given
from hypothesis import strategies as st

from conftest import CALENDAR, NOW, make_completion, make_entry
from spine.domain.models import PainEntry, RecordSnapshot
from spine.services.aggregation import (
    average_level,
    bar_width,
    build_analytics,
    compliance_count,
    daily_averages,
    good_day_count,
    max_level,
    min_level,
    ranked,
    share,
    summarize,
    symptom_counts,
    trigger_counts,
)
from spine.services.windows import TimeWindow

DAY_ONE = datetime(2026, 3, 16, 9, 0, tzinfo=UTC)
DAY_TWO = datetime(2026, 3, 17, 9, 0, tzinfo=UTC)

entry_sets = st.lists(
    st.builds(
        make_entry,
        ts=st.datetimes(
            min_value=datetime(2026, 1, 1),
            max_value=datetime(2026, 3, 31),
            timezones=st.just(UTC),
        ),
        level=st.integers(min_value=0, max_value=10),
    ),
    max_size=30,
)


class TestSummary:
    def test_two_day_scenario(self) -> None:
        entries = [
            make_entry(DAY_ONE, 2),
            make_entry(DAY_ONE + timedelta(hours=6), 4),
            make_entry(DAY_TWO, 8),
        ]

        summary = summarize(entries, CALENDAR)

        assert summary.count == 3
        assert summary.average == pytest.approx(14 / 3)
        assert (summary.minimum, summary.maximum) == (2, 8)
        assert summary.good_days == 1
        assert [(d.day, d.average) for d in daily_averages(entries, CALENDAR)] == [
            (date(2026, 3, 16), 3.0),
            (date(2026, 3, 17), 8.0),
        ]

    def test_empty_set(self) -> None:
        summary = summarize([], CALENDAR)

        assert summary.is_empty
        assert summary.average == 0.0
        assert summary.minimum is None
        assert summary.maximum is None
        assert summary.good_days == 0
        assert daily_averages([], CALENDAR) == []

    def test_good_day_judged_per_entry(self) -> None:
        # the daily mean is 5.5, but one entry is at or below the threshold
        entries = [make_entry(DAY_ONE, 2), make_entry(DAY_ONE, 9)]
        assert good_day_count(entries, CALENDAR) == 1

    def test_good_days_counted_once_per_day(self) -> None:
        entries = [make_entry(DAY_ONE, 1), make_entry(DAY_ONE, 3), make_entry(DAY_TWO, 0)]
        assert good_day_count(entries, CALENDAR) == 2

    def test_custom_threshold(self) -> None:
        entries = [make_entry(DAY_ONE, 4)]
        assert good_day_count(entries, CALENDAR, threshold=3) == 0
        assert good_day_count(entries, CALENDAR, threshold=4) == 1

    def test_out_of_scale_levels_are_still_aggregated(self) -> None:
        odd = [
            PainEntry.model_construct(
                timestamp=DAY_ONE, level=level, location="L5", symptom_type="Dull"
            )
            for level in (-1, 12)
        ]

        assert average_level(odd) == 5.5
        assert min_level(odd) == -1
        assert max_level(odd) == 12
        assert good_day_count(odd, CALENDAR) == 1

    @given(entries=entry_sets)
    def test_summary_invariants(self, entries: list[PainEntry]) -> None:
        summary = summarize(entries, CALENDAR)
        distinct_days = {CALENDAR.day_of(e.timestamp) for e in entries}

        assert summary.good_days <= len(distinct_days)
        if entries:
            assert summary.minimum <= summary.average + 1e-9
            assert summary.average <= summary.maximum + 1e-9
        else:
            assert summary.average == 0.0

    @given(entries=entry_sets)
    def test_daily_averages_sorted_and_unique(self, entries: list[PainEntry]) -> None:
        points = daily_averages(entries, CALENDAR)
        days = [p.day for p in points]

        assert days == sorted(set(days))
        assert sum(p.count for p in points) == len(entries)


class TestBreakdowns:
    def test_symptom_counts(self) -> None:
        entries = [
            make_entry(NOW, 3, symptom="Sharp"),
            make_entry(NOW, 5, symptom="Dull"),
            make_entry(NOW, 6, symptom="Sharp"),
        ]
        assert symptom_counts(entries) == {"Sharp": 2, "Dull": 1}

    def test_trigger_counts_skip_missing_and_unknown(self) -> None:
        entries = [
            make_entry(NOW, 3, trigger="Sitting"),
            make_entry(NOW, 3, trigger="Unknown"),
            make_entry(NOW, 3, trigger=None),
            make_entry(NOW, 3, trigger="Sitting"),
            make_entry(NOW, 3, trigger="Lifting"),
        ]
        assert trigger_counts(entries) == {"Sitting": 2, "Lifting": 1}

    def test_ranked_breaks_ties_alphabetically(self) -> None:
        counts = {"Stress": 2, "Lifting": 2, "Sitting": 5, "Bending": 1}
        assert ranked(counts) == [
            ("Sitting", 5),
            ("Lifting", 2),
            ("Stress", 2),
            ("Bending", 1),
        ]

    def test_share_with_zero_total(self) -> None:
        assert share(3, 0) == 0.0
        assert bar_width(3, 0) == 0.0

    def test_bar_width_scales_against_total(self) -> None:
        assert bar_width(1, 4) == 25.0
        assert bar_width(2, 4, full=20) == 10.0


class TestCompliance:
    def test_sessions_in_window(self) -> None:
        completions = [
            make_completion(NOW - timedelta(days=1)),
            make_completion(NOW - timedelta(days=3), name="Cat-Cow"),
            make_completion(NOW - timedelta(days=10)),
        ]
        assert compliance_count(completions, TimeWindow.last_n_days(7), NOW, CALENDAR) == 2
        assert compliance_count(completions, TimeWindow.all_time(), NOW, CALENDAR) == 3


class TestBuildAnalytics:
    def test_report_uses_window_for_every_aggregate(self) -> None:
        snapshot = RecordSnapshot(
            pain_entries=(
                make_entry(NOW - timedelta(days=1), 2, trigger="Sitting"),
                make_entry(NOW - timedelta(days=2), 6, symptom="Dull", trigger="Sitting"),
                make_entry(NOW - timedelta(days=20), 9, trigger="Lifting"),
            ),
            completions=(
                make_completion(NOW - timedelta(days=1)),
                make_completion(NOW - timedelta(days=15)),
            ),
        )

        report = build_analytics(snapshot, TimeWindow.last_n_days(7), NOW, CALENDAR)

        assert report.summary.count == 2
        assert report.summary.average == 4.0
        assert report.summary.good_days == 1
        assert len(report.daily) == 2
        assert report.symptoms == [("Dull", 1), ("Sharp", 1)]
        assert report.triggers == [("Sitting", 2)]
        assert report.exercise_sessions == 1
        assert not report.is_empty

    def test_empty_snapshot(self) -> None:
        report = build_analytics(RecordSnapshot(), TimeWindow.last_n_days(30), NOW, CALENDAR)

        assert report.is_empty
        assert report.daily == []
        assert report.symptoms == []
        assert report.triggers == []
        assert report.exercise_sessions == 0

    def test_custom_unknown_trigger(self) -> None:
        snapshot = RecordSnapshot(
            pain_entries=(
                make_entry(NOW, 4, trigger="n/a"),
                make_entry(NOW, 4, trigger="Unknown"),
            )
        )

        report = build_analytics(
            snapshot, TimeWindow.today(), NOW, CALENDAR, unknown_trigger="n/a"
        )

        assert report.triggers == [("Unknown", 1)]
