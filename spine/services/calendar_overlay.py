"""
Month grid for the pain calendar.

A grid is a run of leading blanks (so day 1 lands under its weekday column)
followed by one cell per day of the month. Each cell carries the mean pain
level of that local day, or None when nothing was logged.
"""

import calendar as _cal
from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum

import structlog
from pydantic import BaseModel, ConfigDict, Field

from spine.domain.models import PainEntry
from spine.services.clock import LocalCalendar

logger = structlog.get_logger(__name__)

_WEEKDAY_ABBR = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class SeverityTier(str, Enum):
    """Colour band of a pain level."""

    LOW = "low"
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"
    EXTREME = "extreme"

    @property
    def color(self) -> str:
        return _TIER_COLORS[self]

    @property
    def legend(self) -> str:
        return _TIER_LEGENDS[self]


_TIER_COLORS = {
    SeverityTier.LOW: "green",
    SeverityTier.MILD: "yellow",
    SeverityTier.MODERATE: "orange",
    SeverityTier.SEVERE: "red",
    SeverityTier.EXTREME: "purple",
}

_TIER_LEGENDS = {
    SeverityTier.LOW: "Low (0-2)",
    SeverityTier.MILD: "Mild (3-4)",
    SeverityTier.MODERATE: "Moderate (5-6)",
    SeverityTier.SEVERE: "Severe (7-8)",
    SeverityTier.EXTREME: "Extreme (9-10)",
}


def classify_level(value: float) -> SeverityTier | None:
    """
    Band a (possibly averaged) pain level.

    The value is truncated toward zero before banding, so 2.9 is LOW and
    4.99 is MILD. Anything from 9 up, including values above 10, is
    EXTREME. Values that truncate below 0 have no band and return None.
    """
    level = int(value)
    if level < 0:
        return None
    if level <= 2:
        return SeverityTier.LOW
    if level <= 4:
        return SeverityTier.MILD
    if level <= 6:
        return SeverityTier.MODERATE
    if level <= 8:
        return SeverityTier.SEVERE
    return SeverityTier.EXTREME


class DayCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: date
    average: float | None = None
    entry_count: int = 0
    is_today: bool = False

    @property
    def tier(self) -> SeverityTier | None:
        if self.average is None:
            return None
        return classify_level(self.average)

    @property
    def has_data(self) -> bool:
        return self.average is not None


class MonthGrid(BaseModel):
    """Leading ``None`` blanks, then one ``DayCell`` per day of the month."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(ge=1, le=12)
    first_weekday: int = Field(default=6, ge=0, le=6)
    cells: list[DayCell | None]

    @property
    def leading_blanks(self) -> int:
        return sum(1 for c in self.cells if c is None)

    @property
    def days(self) -> list[DayCell]:
        return [c for c in self.cells if c is not None]

    @property
    def title(self) -> str:
        return f"{_cal.month_name[self.month]} {self.year}"

    def weeks(self) -> list[list[DayCell | None]]:
        """Cells split into rows of seven; the last row is padded with blanks."""
        padded = self.cells + [None] * (-len(self.cells) % 7)
        return [padded[i : i + 7] for i in range(0, len(padded), 7)]


def weekday_headers(first_weekday: int = 6) -> list[str]:
    return [_WEEKDAY_ABBR[(first_weekday + i) % 7] for i in range(7)]


def shift_month(reference: date, delta: int) -> date:
    """First day of the month ``delta`` months away from ``reference``."""
    total = reference.year * 12 + (reference.month - 1) + delta
    year, month = divmod(total, 12)
    return date(year, month + 1, 1)


def build_month_grid(
    reference: date | datetime,
    entries: Iterable[PainEntry],
    calendar: LocalCalendar | None = None,
    today: date | None = None,
) -> MonthGrid:
    """Grid for the month containing ``reference`` over the unfiltered entries."""
    calendar = calendar or LocalCalendar.current()
    if isinstance(reference, datetime):
        reference = calendar.day_of(reference)

    year, month = reference.year, reference.month
    first = date(year, month, 1)
    days_in_month = _cal.monthrange(year, month)[1]

    by_day: dict[date, list[int]] = defaultdict(list)
    for entry in entries:
        day = calendar.day_of(entry.timestamp)
        if day.year == year and day.month == month:
            by_day[day].append(entry.level)

    cells: list[DayCell | None] = [None] * calendar.weekday_index(first)
    for offset in range(days_in_month):
        day = date(year, month, offset + 1)
        levels = by_day.get(day, [])
        cells.append(
            DayCell(
                day=day,
                average=sum(levels) / len(levels) if levels else None,
                entry_count=len(levels),
                is_today=day == today,
            )
        )

    logger.debug(
        "month_grid_built",
        year=year,
        month=month,
        days_with_data=len(by_day),
    )
    return MonthGrid(year=year, month=month, first_weekday=calendar.first_weekday, cells=cells)
