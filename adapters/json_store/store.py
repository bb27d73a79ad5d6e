"""
JSON-file record store.

The analytics core only ever sees immutable ``RecordSnapshot`` values; this
adapter is the persistence collaborator that produces them. Writes go
through a temp file and ``os.replace`` so a crash never leaves half a file,
and every mutation notifies subscribers so views can pull a fresh snapshot
instead of relying on live queries.

Key patterns:
- Explicit ``Result`` for load failures (corrupt or invalid files are
  expected, not exceptional)
- Corruption guard: unreadable files are copied aside before reset
- Change notification via plain callbacks
"""

import json
import os
import time
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeVar
from uuid import UUID, uuid4

import structlog
from pydantic import BaseModel, ValidationError

from spine.config import AppConfig
from spine.domain.models import (
    SAMPLE_EXERCISES,
    Exercise,
    ExerciseCompletion,
    Issue,
    PainEntry,
    RecordKind,
    RecordSnapshot,
    Reminder,
)

logger = structlog.get_logger(__name__)

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)

Record = PainEntry | Exercise | ExerciseCompletion | Issue | Reminder
Listener = Callable[[RecordSnapshot], None]

_KIND_BY_TYPE: dict[type[BaseModel], RecordKind] = {
    PainEntry: "pain_entries",
    Exercise: "exercises",
    ExerciseCompletion: "completions",
    Issue: "issues",
    Reminder: "reminders",
}


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Why: Makes error paths visible in type system, forces handling decisions.
    When to use: When failure is expected business logic, not exceptional.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class SnapshotLoadError(Exception):
    """The record file could not be read; ``backup`` holds the original bytes."""

    def __init__(self, message: str, backup: Path | None = None) -> None:
        super().__init__(message)
        self.backup = backup


def resolve_data_path(data_arg: str | None, config: AppConfig) -> Path:
    """Explicit argument first, then the configured path (``SPINE_DATA`` or default)."""
    raw = data_arg or config.storage.data_path
    return Path(raw).expanduser().resolve()


class JsonRecordStore:
    """Snapshot-oriented store backed by a single JSON document."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._listeners: list[Listener] = []
        self.logger = logger.bind(component="json_record_store", path=str(self.path))

    # -------------------------
    # Change notification
    # -------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, snapshot: RecordSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    # -------------------------
    # Load / save
    # -------------------------

    def load(self) -> Result[RecordSnapshot, SnapshotLoadError]:
        """Read the file; missing or blank files are an empty snapshot."""
        if not self.path.exists():
            return Result.ok(RecordSnapshot())

        text = self.path.read_text(encoding="utf-8").strip()
        if not text:
            return Result.ok(RecordSnapshot())

        try:
            snapshot = RecordSnapshot.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as e:
            backup = self._quarantine(text)
            self.logger.error("snapshot_load_failed", error=str(e), backup=str(backup))
            return Result.err(SnapshotLoadError(f"Unreadable record file: {e}", backup))

        self.logger.info(
            "snapshot_loaded",
            pain_entries=len(snapshot.pain_entries),
            exercises=len(snapshot.exercises),
            completions=len(snapshot.completions),
        )
        return Result.ok(snapshot)

    def snapshot(self) -> RecordSnapshot:
        return self.load().unwrap_or(RecordSnapshot())

    def save(self, snapshot: RecordSnapshot) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        payload = json.dumps(snapshot.model_dump(mode="json"), indent=2, ensure_ascii=False)

        with open(tmp, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp, self.path)
        try:
            os.chmod(self.path, 0o600)
        except OSError:
            self.logger.warning("snapshot_chmod_failed")

        self._notify(snapshot)

    def _quarantine(self, text: str) -> Path:
        backup = self.path.with_suffix(f".corrupt-{int(time.time())}.json")
        backup.write_text(text, encoding="utf-8")
        self.path.write_text("", encoding="utf-8")
        return backup

    # -------------------------
    # Mutations
    # -------------------------

    def _write(self, kind: RecordKind, records: tuple[Record, ...]) -> RecordSnapshot:
        snapshot = self.snapshot().model_copy(update={kind: records})
        self.save(snapshot)
        return snapshot

    def add(self, record: Record) -> RecordSnapshot:
        kind = _KIND_BY_TYPE[type(record)]
        current: tuple[Record, ...] = getattr(self.snapshot(), kind)
        self.logger.info("record_added", kind=kind, id=str(record.id))
        return self._write(kind, (*current, record))

    def replace(self, record: Record) -> RecordSnapshot:
        """Swap in a transitioned record with the same id."""
        kind = _KIND_BY_TYPE[type(record)]
        current: tuple[Record, ...] = getattr(self.snapshot(), kind)
        if not any(r.id == record.id for r in current):
            raise KeyError(f"No {kind} record with id {record.id}")
        return self._write(kind, tuple(record if r.id == record.id else r for r in current))

    def delete(self, kind: RecordKind, record_id: UUID) -> RecordSnapshot:
        current: tuple[Record, ...] = getattr(self.snapshot(), kind)
        kept = tuple(r for r in current if r.id != record_id)
        if len(kept) == len(current):
            raise KeyError(f"No {kind} record with id {record_id}")
        self.logger.info("record_deleted", kind=kind, id=str(record_id))
        return self._write(kind, kept)

    def log_exercise(self, exercise_id: UUID, at: datetime | None = None) -> ExerciseCompletion:
        """Append a completion and stamp the exercise's last completed date."""
        snapshot = self.snapshot()
        exercise = next((e for e in snapshot.exercises if e.id == exercise_id), None)
        if exercise is None:
            raise KeyError(f"No exercises record with id {exercise_id}")

        updated, completion = exercise.log_completion(at)
        exercises = tuple(updated if e.id == exercise_id else e for e in snapshot.exercises)
        self.save(
            snapshot.model_copy(
                update={"exercises": exercises, "completions": (*snapshot.completions, completion)}
            )
        )
        self.logger.info("exercise_logged", exercise=exercise.name)
        return completion

    def seed_sample_exercises(self) -> RecordSnapshot:
        """Add the starter exercise catalogue when no exercises exist yet."""
        snapshot = self.snapshot()
        if snapshot.exercises:
            return snapshot
        seeded = tuple(e.model_copy(update={"id": uuid4()}) for e in SAMPLE_EXERCISES)
        self.logger.info("sample_exercises_seeded", count=len(seeded))
        return self._write("exercises", seeded)
