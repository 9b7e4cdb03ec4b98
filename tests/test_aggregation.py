"""Tests for workout grouping, windows and trend classification."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from neofit.errors import InvalidArgument
from neofit.reporting.aggregation import (
    Trend,
    build_report,
    classify_trend,
    filter_recent,
    group_by_date,
    summarize,
    workout_type_counts,
)
from neofit.tracking.models import Workout


def make_workout(day: datetime, calories: float = 100, duration: float = 30,
                 distance=None, workout_type: str = "Running") -> Workout:
    return Workout(
        id=str(day.timestamp()),
        type=workout_type,
        date=day,
        duration=duration,
        calories_burned=calories,
        distance=distance,
    )


class TestGroupByDate:
    def test_sums_same_day(self) -> None:
        workouts = [
            make_workout(datetime(2024, 3, 2, 7), 300, 30, distance=5.0),
            make_workout(datetime(2024, 3, 2, 19), 200, 45),
            make_workout(datetime(2024, 3, 1, 12), 100, 20, distance=2.5),
        ]
        groups = group_by_date(workouts)

        assert [g.key for g in groups] == ["2024-03-01", "2024-03-02"]
        day = groups[1]
        assert day.workouts == 2
        assert day.calories_burned == 500
        assert day.duration == 75
        assert day.distance == pytest.approx(5.0)

    def test_empty(self) -> None:
        assert group_by_date([]) == []


class TestFilterRecent:
    def test_window(self, now) -> None:
        workouts = [
            make_workout(now - timedelta(days=1)),
            make_workout(now - timedelta(days=7)),
            make_workout(now - timedelta(days=8)),
        ]
        assert len(filter_recent(workouts, 7, now)) == 2
        assert len(filter_recent(workouts, 30, now)) == 3

    def test_arbitrary_positive_days(self, now) -> None:
        workouts = [make_workout(now - timedelta(days=12))]
        assert filter_recent(workouts, 13, now) == workouts
        assert filter_recent(workouts, 11, now) == []

    @pytest.mark.parametrize("days", [0, -7, 2.5])
    def test_rejects_invalid_days(self, now, days) -> None:
        with pytest.raises(InvalidArgument):
            filter_recent([], days, now)


class TestClassifyTrend:
    def _series(self, calories):
        start = datetime(2024, 3, 1)
        return [make_workout(start + timedelta(days=i), c) for i, c in enumerate(calories)]

    def test_up(self) -> None:
        assert classify_trend(self._series([100, 100, 300, 300])) == Trend.UP

    def test_down(self) -> None:
        assert classify_trend(self._series([300, 300, 100, 100])) == Trend.DOWN

    def test_stable(self) -> None:
        assert classify_trend(self._series([200, 200, 200, 200])) == Trend.STABLE

    def test_empty_is_stable(self) -> None:
        assert classify_trend([]) == Trend.STABLE

    def test_single_workout_is_up(self) -> None:
        """First half is empty (mean 0), second half holds the workout."""
        assert classify_trend(self._series([150])) == Trend.UP

    def test_odd_count_splits_at_floor(self) -> None:
        # halves [100] and [100, 400] -> 100 vs 250
        assert classify_trend(self._series([100, 100, 400])) == Trend.UP

    def test_orders_by_date(self) -> None:
        workouts = self._series([100, 100, 300, 300])
        assert classify_trend(list(reversed(workouts))) == Trend.UP


class TestSummaries:
    def test_type_counts(self) -> None:
        workouts = [
            make_workout(datetime(2024, 3, 1), workout_type="Yoga"),
            make_workout(datetime(2024, 3, 2), workout_type="Running"),
            make_workout(datetime(2024, 3, 3), workout_type="Running"),
        ]
        assert workout_type_counts(workouts) == {"Running": 2, "Yoga": 1}

    def test_summarize(self) -> None:
        workouts = [
            make_workout(datetime(2024, 3, 1), 300, 30, distance=5.0),
            make_workout(datetime(2024, 3, 2), 100, 60),
        ]
        summary = summarize(workouts)
        assert summary.count == 2
        assert summary.total_calories == 400
        assert summary.total_distance == pytest.approx(5.0)
        assert summary.average_duration == pytest.approx(45.0)

    def test_summarize_empty(self) -> None:
        summary = summarize([])
        assert summary.count == 0
        assert summary.average_duration == 0.0


class TestBuildReport:
    def test_report(self, store, now) -> None:
        store.add_workout("Running", now - timedelta(days=40), 30, 900)
        store.add_workout("Running", now - timedelta(days=5), 30, 100, distance=4.0)
        store.add_workout("Cycling", now - timedelta(days=2), 60, 400)
        store.add_workout("Cycling", now - timedelta(days=2, hours=1), 20, 200)

        report = build_report(store, 30, now)

        assert report.summary.count == 3
        assert report.summary.total_calories == 700
        assert [d.date for d in report.daily] == [
            date(2024, 3, 10),
            date(2024, 3, 13),
        ]
        assert report.type_counts == {"Cycling": 2, "Running": 1}
        # ordered: 100 | 200, 400 -> up
        assert report.trend == Trend.UP

    def test_empty_report(self, store, now) -> None:
        report = build_report(store, 7, now)
        assert report.summary.count == 0
        assert report.daily == []
        assert report.trend == Trend.STABLE
