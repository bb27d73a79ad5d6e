"""
Plain-text exports for sharing with a clinician or the beta team.

Output is fully determined by the arguments (the generation time is passed
in, timestamps use a fixed strftime pattern), so the same input always
renders byte-identical text.
"""

from collections.abc import Sequence
from datetime import datetime

import structlog

from spine.config import ExportConfig
from spine.domain.models import Issue, PainEntry
from spine.services.aggregation import PainSummary
from spine.services.clock import LocalCalendar

logger = structlog.get_logger(__name__)


def _stamp(ts: datetime, config: ExportConfig, calendar: LocalCalendar | None) -> str:
    if calendar is not None:
        ts = calendar.localize(ts)
    return ts.strftime(config.timestamp_format)


def export_pain_history(
    entries: Sequence[PainEntry],
    summary: PainSummary,
    filter_description: str,
    generated_at: datetime,
    config: ExportConfig | None = None,
    calendar: LocalCalendar | None = None,
) -> str:
    """
    Render the pain history report.

    Summary figures are taken from ``summary`` as-is so the report always
    agrees with what the trends screen showed. Entries are written in the
    order given.
    """
    config = config or ExportConfig()
    heavy = "=" * config.rule_width
    light = "-" * config.rule_width

    lines = [
        f"{config.app_name} Pain History Export",
        f"Generated: {_stamp(generated_at, config, calendar)}",
        f"Filter: {filter_description}",
        "",
        "Summary Statistics:",
        f"Total Entries: {summary.count}",
        f"Average Pain Level: {summary.average:.1f}",
        f"Highest Pain: {summary.maximum if summary.maximum is not None else 0}",
        f"Lowest Pain: {summary.minimum if summary.minimum is not None else 0}",
        "",
        heavy,
        "",
    ]

    for entry in entries:
        lines.append(_stamp(entry.timestamp, config, calendar))
        lines.append(f"Pain Level: {entry.level}/10")
        lines.append(f"Location: {entry.location}")
        lines.append(f"Symptom: {entry.symptom_type}")
        if entry.trigger is not None:
            lines.append(f"Trigger: {entry.trigger}")
        if entry.notes is not None:
            lines.append(f"Notes: {entry.notes}")
        lines.extend(["", light, ""])

    logger.info("pain_history_exported", entries=len(entries), filter=filter_description)
    return "\n".join(lines) + "\n"


def export_issues(
    issues: Sequence[Issue],
    generated_at: datetime,
    config: ExportConfig | None = None,
    calendar: LocalCalendar | None = None,
) -> str:
    """Render the beta issue log, numbered in the order given."""
    config = config or ExportConfig()
    resolved = sum(1 for i in issues if i.is_resolved)

    lines = [
        f"{config.app_name} Beta Issues Export",
        f"Generated: {_stamp(generated_at, config, calendar)}",
        f"Total Issues: {len(issues)}",
        f"Open: {len(issues) - resolved}",
        f"Resolved: {resolved}",
        "",
        "=" * config.rule_width,
        "",
    ]

    for number, issue in enumerate(issues, start=1):
        lines.append(f"Issue #{number}")
        lines.append(f"Status: {'✓ Resolved' if issue.is_resolved else '○ Open'}")
        lines.append(f"Category: {issue.category}")
        lines.append(f"Severity: {issue.severity}")
        lines.append(f"Title: {issue.title}")
        lines.append(f"Description: {issue.description}")
        lines.append(f"Reported: {_stamp(issue.timestamp, config, calendar)}")
        if issue.resolved_at is not None:
            lines.append(f"Resolved: {_stamp(issue.resolved_at, config, calendar)}")
        lines.extend(["", "-" * config.rule_width, ""])

    logger.info("issues_exported", total=len(issues), resolved=resolved)
    return "\n".join(lines) + "\n"
