"""
Reminder to notification-request mapping.

Delivery belongs to the host OS; this module only describes what should be
scheduled so the platform layer can hand it over unchanged.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from spine.domain.models import Reminder


class NotificationRequest(BaseModel):
    """Calendar trigger at a wall-clock hour and minute."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    title: str
    body: str
    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)
    repeats: bool


def notification_request(reminder: Reminder) -> NotificationRequest:
    return NotificationRequest(
        identifier=str(reminder.id),
        title=reminder.title,
        body=reminder.description,
        hour=reminder.time_of_day.hour,
        minute=reminder.time_of_day.minute,
        repeats=reminder.repeat_daily,
    )


def pending_requests(reminders: Iterable[Reminder]) -> list[NotificationRequest]:
    """Requests for enabled reminders, earliest time of day first."""
    enabled = sorted((r for r in reminders if r.is_enabled), key=lambda r: r.time_of_day)
    return [notification_request(r) for r in enabled]
