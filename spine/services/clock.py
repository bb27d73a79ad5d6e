"""
Local calendar arithmetic shared by every date-bucketing service.

All "calendar day" questions (same day, start of week, month boundaries)
are answered in the calendar's timezone. ``tz=None`` means the system
local zone, matching how the records are entered on the device.
"""

import calendar as _cal
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo


@dataclass(frozen=True)
class LocalCalendar:
    """Timezone plus first day of the week (0=Monday ... 6=Sunday)."""

    tz: tzinfo | None = None
    first_weekday: int = 6

    def __post_init__(self) -> None:
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0-6, got {self.first_weekday}")

    @classmethod
    def current(cls, first_weekday: int = 6) -> "LocalCalendar":
        """Calendar in the system local zone, DST offset resolved per timestamp."""
        return cls(tz=None, first_weekday=first_weekday)

    def localize(self, ts: datetime) -> datetime:
        return ts.astimezone(self.tz)

    def day_of(self, ts: datetime) -> date:
        return self.localize(ts).date()

    def is_same_day(self, a: datetime, b: datetime) -> bool:
        return self.day_of(a) == self.day_of(b)

    def start_of_day(self, ts: datetime) -> datetime:
        local = self.localize(ts)
        return datetime.combine(local.date(), time.min, tzinfo=local.tzinfo)

    def weekday_index(self, day: date) -> int:
        """Column of ``day`` in a week that begins on ``first_weekday``."""
        return (day.weekday() - self.first_weekday) % 7

    def start_of_week(self, ts: datetime) -> datetime:
        """Local midnight of the most recent ``first_weekday`` on or before ``ts``."""
        start = self.start_of_day(ts)
        return start - timedelta(days=self.weekday_index(start.date()))

    def add_months(self, ts: datetime, months: int) -> datetime:
        """Calendar-month arithmetic; the day of month is clamped (Mar 31 - 1 -> Feb 28)."""
        total = ts.year * 12 + (ts.month - 1) + months
        year, month = divmod(total, 12)
        month += 1
        day = min(ts.day, _cal.monthrange(year, month)[1])
        return ts.replace(year=year, month=month, day=day)
