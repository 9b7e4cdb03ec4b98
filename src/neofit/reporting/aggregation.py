"""Workout aggregation for statistics and reports."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from neofit.errors import InvalidArgument
from neofit.tracking.models import Workout
from neofit.tracking.store import Store


class Trend(Enum):
    """Direction of calories burned over a period."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass
class DailyWorkoutTotals:
    """Sum of all workouts on one calendar date."""

    date: date
    workouts: int = 0
    duration: float = 0.0
    calories_burned: float = 0.0
    distance: float = 0.0

    @property
    def key(self) -> str:
        return self.date.isoformat()


@dataclass
class WorkoutSummary:
    """Totals over a list of workouts."""

    count: int
    total_calories: float
    total_distance: float
    total_duration: float
    average_duration: float


@dataclass
class WorkoutReport:
    """Statistics for a trailing window of days."""

    days: int
    start: datetime
    end: datetime
    workouts: list[Workout]
    summary: WorkoutSummary
    daily: list[DailyWorkoutTotals]
    type_counts: dict[str, int] = field(default_factory=dict)
    trend: Trend = Trend.STABLE


def group_by_date(workouts: Iterable[Workout]) -> list[DailyWorkoutTotals]:
    """Sum workouts per calendar date.

    Several workouts on the same day are added together. A missing distance
    counts as 0.

    Returns:
        One DailyWorkoutTotals per date, oldest first
    """
    groups: dict[str, DailyWorkoutTotals] = {}
    for w in workouts:
        day = w.date.date()
        key = day.isoformat()
        if key not in groups:
            groups[key] = DailyWorkoutTotals(date=day)
        totals = groups[key]
        totals.workouts += 1
        totals.duration += w.duration
        totals.calories_burned += w.calories_burned
        totals.distance += w.distance or 0

    return [groups[key] for key in sorted(groups)]


def window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Start of a trailing window of ``days`` days ending at ``now``.

    Raises:
        InvalidArgument: If days is not a positive integer
    """
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise InvalidArgument(f"days must be a positive integer, got {days!r}")
    return (now or datetime.now()) - timedelta(days=days)


def filter_recent(
    workouts: Iterable[Workout],
    days: int,
    now: Optional[datetime] = None,
) -> list[Workout]:
    """Workouts dated on or after ``now - days``."""
    start = window_start(days, now)
    return [w for w in workouts if w.date >= start]


def _mean_calories(workouts: list[Workout]) -> float:
    if not workouts:
        return 0.0
    return sum(w.calories_burned for w in workouts) / len(workouts)


def classify_trend(workouts: Iterable[Workout]) -> Trend:
    """Compare mean calories of the earlier and later half of the workouts.

    Workouts are ordered by date and split at ``len // 2``; with an odd
    count the later half gets the extra workout. An empty half has a mean
    of 0, so no workouts at all is STABLE.
    """
    ordered = sorted(workouts, key=lambda w: w.date)
    half = len(ordered) // 2
    first_avg = _mean_calories(ordered[:half])
    second_avg = _mean_calories(ordered[half:])

    if second_avg > first_avg:
        return Trend.UP
    if second_avg < first_avg:
        return Trend.DOWN
    return Trend.STABLE


def workout_type_counts(workouts: Iterable[Workout]) -> dict[str, int]:
    """Number of workouts per type label, most frequent first."""
    return dict(Counter(w.type for w in workouts).most_common())


def summarize(workouts: Iterable[Workout]) -> WorkoutSummary:
    workouts = list(workouts)
    total_duration = sum(w.duration for w in workouts)
    return WorkoutSummary(
        count=len(workouts),
        total_calories=sum(w.calories_burned for w in workouts),
        total_distance=sum(w.distance or 0 for w in workouts),
        total_duration=total_duration,
        average_duration=total_duration / len(workouts) if workouts else 0.0,
    )


def build_report(
    store: Store,
    days: int,
    now: Optional[datetime] = None,
) -> WorkoutReport:
    """Build statistics for the last ``days`` days.

    Args:
        store: State to read
        days: Window length in days (7, 30, 90 are typical)
        now: End of the window (default: now)

    Returns:
        WorkoutReport
    """
    now = now or datetime.now()
    start = window_start(days, now)
    recent = sorted(
        (w for w in store.workouts if w.date >= start),
        key=lambda w: w.date,
    )

    return WorkoutReport(
        days=days,
        start=start,
        end=now,
        workouts=recent,
        summary=summarize(recent),
        daily=group_by_date(recent),
        type_counts=workout_type_counts(recent),
        trend=classify_trend(recent),
    )
