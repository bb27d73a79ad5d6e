"""
Core services for the application.

This package contains the analytics pipeline: window filtering, pain
aggregation, the calendar overlay, exercise goal progress and text export.
"""

from .aggregation import (
    AnalyticsReport,
    DailyAverage,
    PainSummary,
    build_analytics,
    daily_averages,
    good_day_count,
    summarize,
)
from .calendar_overlay import MonthGrid, SeverityTier, build_month_grid, classify_level
from .clock import LocalCalendar
from .export import export_issues, export_pain_history
from .frequency import ParsedFrequency, parse_frequency
from .goals import GoalProgress, evaluate_exercise, evaluate_goal
from .reminders import NotificationRequest, pending_requests
from .windows import TimeWindow, WindowKind, filter_by_window

__all__ = [
    "AnalyticsReport",
    "DailyAverage",
    "GoalProgress",
    "LocalCalendar",
    "MonthGrid",
    "NotificationRequest",
    "PainSummary",
    "ParsedFrequency",
    "SeverityTier",
    "TimeWindow",
    "WindowKind",
    "build_analytics",
    "build_month_grid",
    "classify_level",
    "daily_averages",
    "evaluate_exercise",
    "evaluate_goal",
    "export_issues",
    "export_pain_history",
    "filter_by_window",
    "good_day_count",
    "parse_frequency",
    "pending_requests",
    "summarize",
]
