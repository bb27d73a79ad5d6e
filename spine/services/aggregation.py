"""
Pain and exercise aggregation.

Turns a filtered set of records into the numbers the trends screen shows:
summary statistics, per-day averages for the trend line, symptom and
trigger breakdowns, good-day counts and exercise compliance.

Every function is total. Empty input yields zeros / None sentinels, never
a division error, so callers can render an explicit "no data" state.
"""

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

import structlog
from pydantic import BaseModel, ConfigDict, computed_field

from spine.domain.models import ExerciseCompletion, PainEntry, RecordSnapshot
from spine.services.clock import LocalCalendar
from spine.services.windows import TimeWindow, filter_by_window

# Configure structured logging once for the whole package
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)

GOOD_DAY_THRESHOLD = 3
UNKNOWN_TRIGGER = "Unknown"


class DailyAverage(BaseModel):
    """Mean pain level of one local calendar day."""

    model_config = ConfigDict(frozen=True)

    day: date
    average: float
    count: int


class PainSummary(BaseModel):
    """Headline statistics for a filtered pain entry set."""

    model_config = ConfigDict(frozen=True)

    count: int
    average: float
    minimum: int | None
    maximum: int | None
    good_days: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_empty(self) -> bool:
        return self.count == 0


class AnalyticsReport(BaseModel):
    """Everything the trends screen renders for one window."""

    model_config = ConfigDict(frozen=True)

    window: TimeWindow
    summary: PainSummary
    daily: list[DailyAverage]
    symptoms: list[tuple[str, int]]
    triggers: list[tuple[str, int]]
    exercise_sessions: int

    @property
    def is_empty(self) -> bool:
        return self.summary.is_empty


def average_level(entries: Sequence[PainEntry]) -> float:
    if not entries:
        return 0.0
    return sum(e.level for e in entries) / len(entries)


def min_level(entries: Sequence[PainEntry]) -> int | None:
    return min((e.level for e in entries), default=None)


def max_level(entries: Sequence[PainEntry]) -> int | None:
    return max((e.level for e in entries), default=None)


def good_day_count(
    entries: Iterable[PainEntry],
    calendar: LocalCalendar | None = None,
    threshold: int = GOOD_DAY_THRESHOLD,
) -> int:
    """Distinct local days with at least one entry at or below ``threshold``.

    Judged per entry, not per daily average: a day with levels 2 and 9 counts.
    """
    calendar = calendar or LocalCalendar.current()
    return len({calendar.day_of(e.timestamp) for e in entries if e.level <= threshold})


def daily_averages(
    entries: Iterable[PainEntry], calendar: LocalCalendar | None = None
) -> list[DailyAverage]:
    """One point per distinct local day, ascending by date."""
    calendar = calendar or LocalCalendar.current()
    by_day: dict[date, list[int]] = defaultdict(list)
    for entry in entries:
        by_day[calendar.day_of(entry.timestamp)].append(entry.level)

    return [
        DailyAverage(day=day, average=sum(levels) / len(levels), count=len(levels))
        for day, levels in sorted(by_day.items())
    ]


def symptom_counts(entries: Iterable[PainEntry]) -> dict[str, int]:
    return dict(Counter(e.symptom_type for e in entries))


def trigger_counts(
    entries: Iterable[PainEntry], unknown: str = UNKNOWN_TRIGGER
) -> dict[str, int]:
    """Known triggers only; missing and sentinel triggers are skipped."""
    return dict(Counter(e.trigger for e in entries if e.trigger and e.trigger != unknown))


def ranked(counts: Mapping[str, int]) -> list[tuple[str, int]]:
    """Most frequent first; ties broken alphabetically for stable output."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))


def share(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return count / total


def bar_width(count: int, total: int, full: float = 100.0) -> float:
    """Breakdown bar length, scaled against the whole filtered set."""
    return share(count, total) * full


def compliance_count(
    completions: Iterable[ExerciseCompletion],
    window: TimeWindow,
    now: datetime,
    calendar: LocalCalendar | None = None,
) -> int:
    """Exercise sessions inside ``window``, whichever exercise they belong to."""
    return len(filter_by_window(completions, window, now, calendar))


def summarize(
    entries: Sequence[PainEntry],
    calendar: LocalCalendar | None = None,
    good_day_threshold: int = GOOD_DAY_THRESHOLD,
) -> PainSummary:
    summary = PainSummary(
        count=len(entries),
        average=average_level(entries),
        minimum=min_level(entries),
        maximum=max_level(entries),
        good_days=good_day_count(entries, calendar, good_day_threshold),
    )
    logger.debug("pain_summary_computed", count=summary.count, average=summary.average)
    return summary


def build_analytics(
    snapshot: RecordSnapshot,
    window: TimeWindow,
    now: datetime,
    calendar: LocalCalendar | None = None,
    *,
    good_day_threshold: int = GOOD_DAY_THRESHOLD,
    unknown_trigger: str = UNKNOWN_TRIGGER,
) -> AnalyticsReport:
    """Filter the snapshot once and compute every trends-screen aggregate."""
    calendar = calendar or LocalCalendar.current()
    entries = filter_by_window(snapshot.pain_entries, window, now, calendar)

    report = AnalyticsReport(
        window=window,
        summary=summarize(entries, calendar, good_day_threshold),
        daily=daily_averages(entries, calendar),
        symptoms=ranked(symptom_counts(entries)),
        triggers=ranked(trigger_counts(entries, unknown_trigger)),
        exercise_sessions=compliance_count(snapshot.completions, window, now, calendar),
    )

    logger.info(
        "analytics_built",
        window=window.label,
        entries=report.summary.count,
        days=len(report.daily),
        exercise_sessions=report.exercise_sessions,
    )
    return report
