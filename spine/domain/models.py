"""
Domain models for pain, exercise, issue and reminder tracking.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation and are frozen: every state change is an
explicit transition method that returns a new record value.
"""

from datetime import UTC, date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Literal
from uuid import UUID, uuid4

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from spine.services.clock import LocalCalendar

PAIN_LOCATIONS = ("L3", "L4", "L5", "S1", "L3-L4", "L4-L5", "L5-S1", "Multiple", "Radiating")
SYMPTOM_TYPES = (
    "Sharp",
    "Dull",
    "Burning",
    "Numbness",
    "Tingling",
    "Radiating",
    "Aching",
    "Stabbing",
)
TRIGGERS = (
    "Sitting",
    "Standing",
    "Walking",
    "Bending",
    "Lifting",
    "Twisting",
    "Morning",
    "Evening",
    "Weather",
    "Unknown",
)
ISSUE_CATEGORIES = ("Bug", "Feature Request", "UI/UX", "Performance", "Other")
ISSUE_SEVERITIES = ("Low", "Medium", "High", "Critical")
REMINDER_CATEGORIES = ("Pain Log", "Exercise", "Medication")

RecordKind = Literal["pain_entries", "exercises", "completions", "issues", "reminders"]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Period(str, Enum):
    """Goal period for an exercise frequency."""

    DAILY = "daily"
    WEEKLY = "weekly"


class PainEntry(BaseModel):
    """A single logged pain episode."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    timestamp: AwareDatetime = Field(default_factory=_utcnow)
    level: int = Field(ge=0, le=10, description="Pain level on the 0-10 scale")
    location: str = Field(min_length=1, description="Spinal level, e.g. L4-L5, or free-form")
    symptom_type: str = Field(min_length=1)
    trigger: str | None = None
    notes: str | None = None


class ExerciseCompletion(BaseModel):
    """
    Append-only record that an exercise was performed.

    The exercise name is copied at logging time; renaming or deleting the
    exercise later does not touch existing completions.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    timestamp: AwareDatetime = Field(default_factory=_utcnow)
    exercise_name: str
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)


class Exercise(BaseModel):
    """A prescribed exercise and its target frequency."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    description: str = ""
    sets: int = Field(gt=0)
    reps: int = Field(gt=0)
    frequency: str = Field(default="daily", description="e.g. daily, 2x/day, 3x/week")
    form_guide: str | None = None
    is_completed: bool = False
    completed_at: AwareDatetime | None = None
    last_completed_date: AwareDatetime | None = None

    def mark_completed(self, at: datetime | None = None) -> "Exercise":
        at = at or _utcnow()
        return self.model_copy(
            update={"is_completed": True, "completed_at": at, "last_completed_date": at}
        )

    def toggle_completed(self, at: datetime | None = None) -> "Exercise":
        if self.is_completed:
            return self.model_copy(update={"is_completed": False, "completed_at": None})
        return self.mark_completed(at)

    def reset_daily(self, today: date, calendar: "LocalCalendar") -> "Exercise":
        """Clear the legacy completion flag unless the last completion was on ``today``."""
        if self.last_completed_date is None:
            return self
        if calendar.day_of(self.last_completed_date) == today:
            return self
        return self.model_copy(update={"is_completed": False, "completed_at": None})

    def log_completion(
        self, at: datetime | None = None
    ) -> tuple["Exercise", ExerciseCompletion]:
        """Record a session: returns the updated exercise and the new completion."""
        at = at or _utcnow()
        completion = ExerciseCompletion(
            timestamp=at, exercise_name=self.name, sets=self.sets, reps=self.reps
        )
        return self.model_copy(update={"last_completed_date": at}), completion


class Issue(BaseModel):
    """Beta feedback item."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    timestamp: AwareDatetime = Field(default_factory=_utcnow)
    title: str = Field(min_length=1)
    description: str = ""
    category: str = "Bug"
    severity: str = "Medium"
    is_resolved: bool = False
    resolved_at: AwareDatetime | None = None

    @model_validator(mode="after")
    def resolved_at_matches_state(self) -> "Issue":
        if self.is_resolved != (self.resolved_at is not None):
            raise ValueError("resolved_at must be set exactly when the issue is resolved")
        return self

    def mark_resolved(self, at: datetime | None = None) -> "Issue":
        return self.model_copy(update={"is_resolved": True, "resolved_at": at or _utcnow()})

    def toggle_resolved(self, at: datetime | None = None) -> "Issue":
        if self.is_resolved:
            return self.model_copy(update={"is_resolved": False, "resolved_at": None})
        return self.mark_resolved(at)


class Reminder(BaseModel):
    """Daily reminder definition. Scheduling is done by the host OS."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    title: str = Field(min_length=1)
    description: str = ""
    time_of_day: time
    is_enabled: bool = True
    repeat_daily: bool = True
    category: str = "Pain Log"

    def toggle_enabled(self) -> "Reminder":
        return self.model_copy(update={"is_enabled": not self.is_enabled})


class RecordSnapshot(BaseModel):
    """Consistent, read-only view of every record kind in the store."""

    model_config = ConfigDict(frozen=True)

    pain_entries: tuple[PainEntry, ...] = ()
    exercises: tuple[Exercise, ...] = ()
    completions: tuple[ExerciseCompletion, ...] = ()
    issues: tuple[Issue, ...] = ()
    reminders: tuple[Reminder, ...] = ()

    def newest_first(
        self, kind: Literal["pain_entries", "completions", "issues"]
    ) -> list[PainEntry] | list[ExerciseCompletion] | list[Issue]:
        """Records of a timestamped kind in display order (newest first)."""
        return sorted(getattr(self, kind), key=lambda r: r.timestamp, reverse=True)


SAMPLE_EXERCISES: tuple[Exercise, ...] = (
    Exercise(
        name="Pelvic Tilts",
        description=(
            "Lie on back, knees bent. Flatten lower back to floor by tightening abs. "
            "Hold 5 seconds."
        ),
        sets=2,
        reps=10,
        frequency="2x/day",
        form_guide=(
            "1. Lie on your back with knees bent and feet flat on the floor\n"
            "2. Place arms at your sides, palms down\n"
            "3. Tighten your abdominal muscles\n"
            "4. Push your lower back into the floor\n"
            "5. Hold for 5 seconds while breathing normally\n"
            "6. Relax and return to starting position"
        ),
    ),
    Exercise(
        name="Knee to Chest Stretch",
        description="Lie on back, pull one knee to chest. Hold 20-30 seconds each side.",
        sets=2,
        reps=3,
        frequency="2x/day",
        form_guide=(
            "1. Lie on your back with both knees bent\n"
            "2. Slowly bring one knee toward your chest\n"
            "3. Clasp your hands behind your thigh (not on the knee)\n"
            "4. Gently pull knee closer until you feel a stretch\n"
            "5. Hold for 20-30 seconds\n"
            "6. Lower leg slowly and repeat on other side"
        ),
    ),
    Exercise(
        name="Cat-Cow Stretch",
        description="On hands and knees, alternate arching and rounding back. Move slowly.",
        sets=2,
        reps=10,
        frequency="daily",
        form_guide=(
            "1. Start on hands and knees (tabletop position)\n"
            "2. Hands under shoulders, knees under hips\n"
            "3. COW: Inhale, drop belly, lift chest and tailbone\n"
            "4. CAT: Exhale, round spine up, tuck chin and tailbone\n"
            "5. Move smoothly between positions"
        ),
    ),
    Exercise(
        name="Bird Dog",
        description=(
            "On hands and knees, extend opposite arm and leg. Hold 5 seconds. Core stability."
        ),
        sets=2,
        reps=10,
        frequency="daily",
        form_guide=(
            "1. Start on hands and knees (tabletop position)\n"
            "2. Keep your back flat like a table\n"
            "3. Slowly extend right arm forward and left leg back\n"
            "4. Hold for 5 seconds, keeping core tight\n"
            "5. Return to start and switch sides"
        ),
    ),
    Exercise(
        name="Prone Press-ups",
        description=(
            "Lie face down, press upper body up keeping hips on floor. McKenzie extension."
        ),
        sets=3,
        reps=10,
        frequency="3x/day",
        form_guide=(
            "1. Lie face down with hands under shoulders\n"
            "2. Slowly press upper body up using arms\n"
            "3. Keep hips and pelvis on the floor\n"
            "4. Hold 1-2 seconds, then lower slowly\n"
            "Stop if you feel pain down your leg."
        ),
    ),
    Exercise(
        name="Sciatic Nerve Glide",
        description="Seated, extend leg while flexing foot. For L5 nerve compression relief.",
        sets=2,
        reps=10,
        frequency="2x/day",
        form_guide=(
            "1. Sit upright in a chair\n"
            "2. Slowly straighten one leg out in front\n"
            "3. Flex your foot (toes toward you) as leg extends\n"
            "4. Point your foot as you bend the knee back\n"
            "5. Repeat on same leg, then switch"
        ),
    ),
    Exercise(
        name="Wall Sits",
        description="Back against wall, slide down to 90 degree knee bend. Hold 20-30 seconds.",
        sets=2,
        reps=5,
        frequency="daily",
        form_guide=(
            "1. Stand with back against a wall\n"
            "2. Feet shoulder-width apart, 2 feet from wall\n"
            "3. Slide down until thighs are parallel to floor\n"
            "4. Hold for 20-30 seconds, then slide up"
        ),
    ),
    Exercise(
        name="Bridges",
        description="Lie on back, knees bent, lift hips. Strengthens glutes and core.",
        sets=2,
        reps=12,
        frequency="daily",
        form_guide=(
            "1. Lie on back with knees bent, feet flat\n"
            "2. Squeeze glutes and lift hips off floor\n"
            "3. Hold for 2-3 seconds at the top\n"
            "4. Lower slowly back to starting position"
        ),
    ),
)
