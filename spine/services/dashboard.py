"""
Terminal dashboard.

Loads a snapshot from the JSON store, runs it through the analytics
services and prints the trends cards, breakdowns, pain calendar and
exercise goals with rich.

Run with: spine --range 14D
"""

import argparse
import logging
from datetime import UTC, datetime

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.json_store import JsonRecordStore, resolve_data_path
from spine.config import AppConfig, get_config
from spine.domain.models import RecordSnapshot
from spine.services.aggregation import AnalyticsReport, bar_width, build_analytics, logger
from spine.services.calendar_overlay import (
    MonthGrid,
    SeverityTier,
    build_month_grid,
    classify_level,
    shift_month,
    weekday_headers,
)
from spine.services.clock import LocalCalendar
from spine.services.export import export_pain_history
from spine.services.goals import evaluate_exercise
from spine.services.windows import ANALYTICS_RANGES, filter_by_window

# rich has no "orange" style name
_RICH_COLORS = {"orange": "dark_orange"}


def _tier_style(tier: SeverityTier | None) -> str:
    if tier is None:
        return "dim"
    return _RICH_COLORS.get(tier.color, tier.color)


def render_stats(report: AnalyticsReport) -> Table:
    summary = report.summary
    table = Table(title=f"Trends ({report.window.label})")
    table.add_column("AVG PAIN", justify="right")
    table.add_column("ENTRIES", justify="right")
    table.add_column("GOOD DAYS", justify="right")
    table.add_column("SESSIONS", justify="right")
    table.add_row(
        Text(f"{summary.average:.1f}", style=_tier_style(classify_level(summary.average))),
        str(summary.count),
        Text(str(summary.good_days), style="green"),
        str(report.exercise_sessions),
    )
    return table


def render_daily(report: AnalyticsReport) -> Table:
    table = Table(title="Pain Trend")
    table.add_column("Date")
    table.add_column("Average", justify="right")
    table.add_column("Entries", justify="right")
    for point in report.daily:
        table.add_row(
            point.day.isoformat(),
            Text(f"{point.average:.2f}", style=_tier_style(classify_level(point.average))),
            str(point.count),
        )
    return table


def render_breakdowns(report: AnalyticsReport) -> Table:
    total = report.summary.count
    table = Table(title="Symptoms & Triggers")
    table.add_column("Symptom")
    table.add_column("Count", justify="right")
    table.add_column("Share")
    for label, count in report.symptoms:
        table.add_row(label, str(count), "█" * round(bar_width(count, total, full=20)))

    if report.triggers:
        table.add_section()
        for label, count in report.triggers:
            table.add_row(Text(label, style="italic"), str(count), "")
    return table


def render_month(grid: MonthGrid) -> Table:
    table = Table(title=grid.title, show_lines=False)
    for header in weekday_headers(grid.first_weekday):
        table.add_column(header, justify="center")

    for week in grid.weeks():
        row = []
        for cell in week:
            if cell is None:
                row.append(Text(""))
                continue
            label = f"{cell.day.day:>2} ●"
            style = _tier_style(cell.tier)
            if cell.is_today:
                style += " bold underline"
            row.append(Text(label, style=style))
        table.add_row(*row)

    legend = "  ".join(tier.legend for tier in SeverityTier)
    table.caption = f"{legend}  (dim: no data)"
    return table


def render_exercises(
    snapshot: RecordSnapshot, now: datetime, calendar: LocalCalendar
) -> Table:
    table = Table(title="Exercises")
    table.add_column("Exercise")
    table.add_column("Sets x Reps", justify="center")
    table.add_column("Frequency")
    table.add_column("Progress")
    for exercise in snapshot.exercises:
        progress = evaluate_exercise(exercise, snapshot.completions, now, calendar)
        table.add_row(
            exercise.name,
            f"{exercise.sets} x {exercise.reps}",
            exercise.frequency,
            Text(progress.label, style="green" if progress.goal_met else "yellow"),
        )
    return table


def render_dashboard(
    snapshot: RecordSnapshot,
    now: datetime,
    calendar: LocalCalendar,
    config: AppConfig,
    range_key: str | None = None,
    month_offset: int = 0,
) -> Group:
    """Every dashboard section for one snapshot."""
    window = ANALYTICS_RANGES[range_key or config.analytics.default_range]
    report = build_analytics(
        snapshot,
        window,
        now,
        calendar,
        good_day_threshold=config.analytics.good_day_threshold,
        unknown_trigger=config.analytics.unknown_trigger,
    )
    today = calendar.day_of(now)
    grid = build_month_grid(
        shift_month(today, month_offset), snapshot.pain_entries, calendar, today=today
    )

    sections: list = []
    if report.is_empty:
        sections.append(Panel("No data yet\nStart logging pain to see trends", style="dim"))
    else:
        sections.extend([render_stats(report), render_daily(report), render_breakdowns(report)])
    sections.append(render_month(grid))
    if snapshot.exercises:
        sections.append(render_exercises(snapshot, now, calendar))
    return Group(*sections)


def main(argv: list[str] | None = None) -> None:
    p = argparse.ArgumentParser(prog="spine", description="Lower-back pain & exercise dashboard")
    p.add_argument("--data", default=None, help="Path to record JSON (overrides SPINE_DATA)")
    p.add_argument("--range", dest="range_key", choices=sorted(ANALYTICS_RANGES), default=None)
    p.add_argument("--month-offset", type=int, default=0, help="Months relative to this one")
    p.add_argument("--export", action="store_true", help="Print the pain history export")
    p.add_argument("--seed", action="store_true", help="Add sample exercises if none exist")
    args = p.parse_args(argv)

    config = get_config()
    logging.basicConfig(level=config.logging.level)

    calendar = LocalCalendar.current(first_weekday=config.analytics.first_weekday)
    now = datetime.now(UTC)
    try:
        shift_month(calendar.day_of(now), args.month_offset)
    except ValueError:
        p.error(f"--month-offset {args.month_offset} is outside the supported calendar range")

    store = JsonRecordStore(resolve_data_path(args.data, config))
    if args.seed:
        store.seed_sample_exercises()

    result = store.load()
    if result.is_err():
        logger.warning("dashboard_using_empty_snapshot", error=str(result.unwrap_err()))
    snapshot = result.unwrap_or(RecordSnapshot())

    console = Console()

    if args.export:
        window = ANALYTICS_RANGES[args.range_key or config.analytics.default_range]
        entries = filter_by_window(snapshot.newest_first("pain_entries"), window, now, calendar)
        report = build_analytics(
            snapshot,
            window,
            now,
            calendar,
            good_day_threshold=config.analytics.good_day_threshold,
            unknown_trigger=config.analytics.unknown_trigger,
        )
        console.print(
            export_pain_history(
                entries,
                report.summary,
                f"All - {window.label}",
                now,
                config.export,
                calendar,
            ),
            markup=False,
            highlight=False,
        )
        return

    console.print(Panel("Spine - Pain & Exercise Dashboard", style="bold blue"))
    console.print(
        render_dashboard(snapshot, now, calendar, config, args.range_key, args.month_offset)
    )


if __name__ == "__main__":
    main()
