"""
Relative time windows and the history-screen filters.

Two different "week" notions exist and are deliberately kept apart:

- ``THIS_WEEK``: a rolling window, everything since ``now - 7 days``.
- ``CALENDAR_WEEK``: everything since the start of the current locale week,
  used for weekly exercise goals.

No window has an upper bound; future-dated records are kept (``TODAY``
keeps only records on today's local date).
"""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from enum import Enum
from typing import Protocol, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from spine.domain.models import PainEntry
from spine.services.clock import LocalCalendar


class Timestamped(Protocol):
    timestamp: datetime


RecordT = TypeVar("RecordT", bound=Timestamped)


class WindowKind(str, Enum):
    ALL_TIME = "all_time"
    TODAY = "today"
    THIS_WEEK = "this_week"
    THIS_MONTH = "this_month"
    LAST_N_DAYS = "last_n_days"
    CALENDAR_WEEK = "calendar_week"


class TimeWindow(BaseModel):
    """A relative time range evaluated against "now" at filter time."""

    model_config = ConfigDict(frozen=True)

    kind: WindowKind
    days: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def days_only_for_last_n(self) -> "TimeWindow":
        if (self.kind == WindowKind.LAST_N_DAYS) != (self.days is not None):
            raise ValueError("days must be given exactly for LAST_N_DAYS windows")
        return self

    @classmethod
    def all_time(cls) -> "TimeWindow":
        return cls(kind=WindowKind.ALL_TIME)

    @classmethod
    def today(cls) -> "TimeWindow":
        return cls(kind=WindowKind.TODAY)

    @classmethod
    def this_week(cls) -> "TimeWindow":
        return cls(kind=WindowKind.THIS_WEEK)

    @classmethod
    def this_month(cls) -> "TimeWindow":
        return cls(kind=WindowKind.THIS_MONTH)

    @classmethod
    def last_n_days(cls, days: int) -> "TimeWindow":
        return cls(kind=WindowKind.LAST_N_DAYS, days=days)

    @classmethod
    def calendar_week(cls) -> "TimeWindow":
        return cls(kind=WindowKind.CALENDAR_WEEK)

    @property
    def label(self) -> str:
        if self.kind == WindowKind.LAST_N_DAYS:
            return f"Last {self.days} Days"
        return _LABELS[self.kind]

    def cutoff(self, now: datetime, calendar: LocalCalendar) -> datetime | None:
        """Inclusive lower bound, or None when the window is unbounded."""
        now = calendar.localize(now)
        if self.kind == WindowKind.ALL_TIME:
            return None
        if self.kind == WindowKind.TODAY:
            return calendar.start_of_day(now)
        if self.kind == WindowKind.THIS_WEEK:
            return now - timedelta(days=7)
        if self.kind == WindowKind.THIS_MONTH:
            return calendar.add_months(now, -1)
        if self.kind == WindowKind.CALENDAR_WEEK:
            return calendar.start_of_week(now)
        return now - timedelta(days=self.days or 0)

    def contains(self, ts: datetime, now: datetime, calendar: LocalCalendar) -> bool:
        if self.kind == WindowKind.TODAY:
            return calendar.is_same_day(ts, now)
        cutoff = self.cutoff(now, calendar)
        return cutoff is None or ts >= cutoff


_LABELS = {
    WindowKind.ALL_TIME: "All Time",
    WindowKind.TODAY: "Today",
    WindowKind.THIS_WEEK: "This Week",
    WindowKind.THIS_MONTH: "This Month",
    WindowKind.CALENDAR_WEEK: "This Calendar Week",
}

# Segmented picker on the trends screen
ANALYTICS_RANGES: dict[str, TimeWindow] = {
    "7D": TimeWindow.last_n_days(7),
    "14D": TimeWindow.last_n_days(14),
    "30D": TimeWindow.last_n_days(30),
}

# Menu on the history screen
HISTORY_RANGES: dict[str, TimeWindow] = {
    "All Time": TimeWindow.all_time(),
    "Today": TimeWindow.today(),
    "This Week": TimeWindow.this_week(),
    "This Month": TimeWindow.this_month(),
}


def filter_by_window(
    records: Iterable[RecordT],
    window: TimeWindow,
    now: datetime,
    calendar: LocalCalendar | None = None,
) -> list[RecordT]:
    """Records whose timestamp falls inside ``window``, input order preserved."""
    calendar = calendar or LocalCalendar.current()
    return [r for r in records if window.contains(r.timestamp, now, calendar)]


def filter_by_location(entries: Iterable[PainEntry], location: str) -> list[PainEntry]:
    """Substring match so "L4" also finds "L4-L5"; "All" keeps everything."""
    if not location or location == "All":
        return list(entries)
    return [e for e in entries if location in e.location]


def search_entries(entries: Iterable[PainEntry], text: str) -> list[PainEntry]:
    """Case-insensitive search across location, symptom, trigger and notes."""
    needle = (text or "").strip().casefold()
    if not needle:
        return list(entries)

    def _hit(entry: PainEntry) -> bool:
        fields = (entry.location, entry.symptom_type, entry.trigger, entry.notes)
        return any(f is not None and needle in f.casefold() for f in fields)

    return [e for e in entries if _hit(e)]


def apply_history_filters(
    entries: Sequence[PainEntry],
    now: datetime,
    *,
    location: str = "All",
    window: TimeWindow | None = None,
    search: str = "",
    calendar: LocalCalendar | None = None,
) -> list[PainEntry]:
    """Location, then time window, then free-text search."""
    result = filter_by_location(entries, location)
    result = filter_by_window(result, window or TimeWindow.all_time(), now, calendar)
    return search_entries(result, search)
