"""Workout grouping, trailing windows and trend reporting."""

from __future__ import annotations

from neofit.reporting.aggregation import (
    DailyWorkoutTotals,
    Trend,
    WorkoutReport,
    WorkoutSummary,
    build_report,
    classify_trend,
    filter_recent,
    group_by_date,
    summarize,
    workout_type_counts,
)

__all__ = [
    "DailyWorkoutTotals",
    "Trend",
    "WorkoutReport",
    "WorkoutSummary",
    "build_report",
    "classify_trend",
    "filter_recent",
    "group_by_date",
    "summarize",
    "workout_type_counts",
]
