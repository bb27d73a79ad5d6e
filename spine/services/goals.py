"""
Exercise goal progress.

Progress is derived entirely from completion timestamps: daily goals count
today's sessions, weekly goals count sessions since the start of the
locale's calendar week (not the rolling 7-day window used by the trends
screen).
"""

from collections.abc import Iterable
from datetime import datetime

import structlog
from pydantic import BaseModel, ConfigDict

from spine.domain.models import Exercise, ExerciseCompletion, Period
from spine.services.clock import LocalCalendar
from spine.services.frequency import parse_frequency
from spine.services.windows import TimeWindow, filter_by_window

logger = structlog.get_logger(__name__)


class GoalProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: int
    target: int
    period: Period
    goal_met: bool
    label: str


def evaluate_goal(
    frequency: str, completions_today: int, completions_this_week: int
) -> GoalProgress:
    parsed = parse_frequency(frequency)
    current = completions_today if parsed.period == Period.DAILY else completions_this_week
    goal_met = current >= parsed.target

    if parsed.period == Period.WEEKLY:
        label = f"{current}/{parsed.target} this week"
    elif parsed.target == 1:
        label = "Done today" if goal_met else "Not done"
    else:
        label = f"{current}/{parsed.target} today"

    return GoalProgress(
        current=current,
        target=parsed.target,
        period=parsed.period,
        goal_met=goal_met,
        label=label,
    )


def _named(completions: Iterable[ExerciseCompletion], name: str) -> list[ExerciseCompletion]:
    return [c for c in completions if c.exercise_name == name]


def completions_today(
    completions: Iterable[ExerciseCompletion],
    exercise_name: str,
    now: datetime,
    calendar: LocalCalendar | None = None,
) -> int:
    window = TimeWindow.today()
    return len(filter_by_window(_named(completions, exercise_name), window, now, calendar))


def completions_this_week(
    completions: Iterable[ExerciseCompletion],
    exercise_name: str,
    now: datetime,
    calendar: LocalCalendar | None = None,
) -> int:
    window = TimeWindow.calendar_week()
    return len(filter_by_window(_named(completions, exercise_name), window, now, calendar))


def evaluate_exercise(
    exercise: Exercise,
    completions: Iterable[ExerciseCompletion],
    now: datetime,
    calendar: LocalCalendar | None = None,
) -> GoalProgress:
    """Progress of one exercise, matching completions by exercise name."""
    calendar = calendar or LocalCalendar.current()
    completions = list(completions)
    progress = evaluate_goal(
        exercise.frequency,
        completions_today(completions, exercise.name, now, calendar),
        completions_this_week(completions, exercise.name, now, calendar),
    )
    logger.debug(
        "exercise_progress_evaluated",
        exercise=exercise.name,
        current=progress.current,
        target=progress.target,
        goal_met=progress.goal_met,
    )
    return progress
