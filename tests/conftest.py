"""Shared fixtures: a fixed UTC calendar and a fixed "now" (Wednesday 2026-03-18)."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from spine.domain.models import ExerciseCompletion, PainEntry
from spine.services.clock import LocalCalendar

NOW = datetime(2026, 3, 18, 15, 0, tzinfo=UTC)
CALENDAR = LocalCalendar(tz=UTC, first_weekday=6)


def make_entry(
    ts: datetime,
    level: int,
    *,
    location: str = "L4-L5",
    symptom: str = "Sharp",
    trigger: str | None = None,
    notes: str | None = None,
) -> PainEntry:
    return PainEntry(
        timestamp=ts,
        level=level,
        location=location,
        symptom_type=symptom,
        trigger=trigger,
        notes=notes,
    )


def make_completion(ts: datetime, name: str = "Bridges") -> ExerciseCompletion:
    return ExerciseCompletion(timestamp=ts, exercise_name=name, sets=2, reps=12)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def utc_calendar() -> LocalCalendar:
    return CALENDAR
