"""
Exercise frequency parsing.

Frequencies are free text picked from a short menu ("daily", "2x/day",
"3x/week", "5x/week"). Parsing never fails: anything unrecognised becomes
once a day so the exercise list always renders a goal.
"""

import re

import structlog
from pydantic import BaseModel, ConfigDict, Field

from spine.domain.models import Period

logger = structlog.get_logger(__name__)

_PER_DAY = re.compile(r"(\d+)x/day")
_PER_WEEK = re.compile(r"(\d+)x/week")


class ParsedFrequency(BaseModel):
    """Target number of completions per period."""

    model_config = ConfigDict(frozen=True)

    target: int = Field(gt=0)
    period: Period


def _count_or_one(pattern: re.Pattern[str], text: str) -> int:
    match = pattern.match(text)
    if match:
        count = int(match.group(1))
        if count > 0:
            return count
    logger.debug("frequency_fallback", frequency=text)
    return 1


def parse_frequency(frequency: str) -> ParsedFrequency:
    """
    Parse "daily", "<N>x/day" or "<N>x/week" (case-insensitive, trimmed).

    The count is read from the start of the text, so trailing words are
    ignored: "2x/day twice" is two a day.

    Strings mentioning "/day" or "/week" with an unusable count fall back to
    a target of 1 for that period; any other text means (1, daily). Callers
    must not read the target of a malformed string as user intent.
    """
    text = (frequency or "").strip().lower()

    if text == "daily":
        return ParsedFrequency(target=1, period=Period.DAILY)

    if "/day" in text:
        return ParsedFrequency(target=_count_or_one(_PER_DAY, text), period=Period.DAILY)

    if "/week" in text:
        return ParsedFrequency(target=_count_or_one(_PER_WEEK, text), period=Period.WEEKLY)

    logger.debug("frequency_unrecognized", frequency=frequency)
    return ParsedFrequency(target=1, period=Period.DAILY)
