"""Derived metrics computed from a Store snapshot.

Every function here reads the store and recomputes from scratch; nothing is
cached. Weight always comes from ``store.latest_weight()`` so the figures
follow the editable weight log.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from neofit.profiles.body_calc import (
    ActivityLevel,
    BMICategory,
    bmi_category,
    calculate_bmi,
    calculate_bmr,
    calculate_tdee,
    estimate_body_fat,
    parse_activity_level,
)
from neofit.tracking.models import Workout
from neofit.tracking.store import Store


@dataclass
class MetricsSnapshot:
    """All derived figures for one point in time."""

    latest_weight: float
    target_weight: float
    weight_to_target: float
    bmi: float
    bmi_category: BMICategory
    body_fat_estimate: float
    bmr: float
    activity_level: ActivityLevel
    tdee: float
    monthly_calories_burned: float
    monthly_distance: float
    daily_calorie_balance: float

    def to_dict(self) -> dict:
        """Convert to a plain dict for JSON output."""
        return {
            "latest_weight": self.latest_weight,
            "target_weight": self.target_weight,
            "weight_to_target": round(self.weight_to_target, 2),
            "bmi": round(self.bmi, 2),
            "bmi_category": self.bmi_category.value,
            "body_fat_estimate": round(self.body_fat_estimate, 2),
            "bmr": round(self.bmr, 2),
            "activity_level": self.activity_level.value,
            "tdee": round(self.tdee, 2),
            "monthly_calories_burned": self.monthly_calories_burned,
            "monthly_distance": round(self.monthly_distance, 2),
            "daily_calorie_balance": self.daily_calorie_balance,
        }


def get_bmi(store: Store) -> float:
    return calculate_bmi(store.latest_weight(), store.get_profile().height)


def get_body_fat_percentage(store: Store) -> float:
    """Deurenberg estimate from the current BMI (not the profile's body_fat)."""
    profile = store.get_profile()
    return estimate_body_fat(get_bmi(store), profile.age, profile.gender)


def get_bmr(store: Store) -> float:
    profile = store.get_profile()
    return calculate_bmr(profile.age, profile.gender, profile.height, store.latest_weight())


def get_tdee(store: Store, activity_level: Union[ActivityLevel, str]) -> float:
    return calculate_tdee(get_bmr(store), activity_level)


def first_day_of_month(now: datetime) -> datetime:
    return datetime(now.year, now.month, 1, tzinfo=now.tzinfo)


def workouts_this_month(store: Store, now: Optional[datetime] = None) -> list[Workout]:
    """Workouts dated on or after the first day of ``now``'s month."""
    start = first_day_of_month(now or datetime.now())
    return [w for w in store.workouts if w.date >= start]


def monthly_calories_burned(store: Store, now: Optional[datetime] = None) -> float:
    return sum(w.calories_burned for w in workouts_this_month(store, now))


def monthly_distance(store: Store, now: Optional[datetime] = None) -> float:
    # Workouts without a distance count as 0 km
    return sum(w.distance or 0 for w in workouts_this_month(store, now))


def daily_calorie_balance(store: Store, today: Optional[date] = None) -> float:
    """Consumed minus burned calories for today, or 0 if nothing was logged."""
    stats = store.get_daily_stats(today or date.today())
    if stats is None:
        return 0
    return stats.calorie_balance


def weight_to_target(store: Store) -> float:
    """Kilograms still to lose (positive) or gain (negative)."""
    return store.latest_weight() - store.get_profile().target_weight


def weight_series(store: Store) -> list[tuple[date, float]]:
    """Weight log as (date, weight) pairs, oldest first, for charting."""
    return [(e.date, e.weight) for e in reversed(store.weight_entries)]


def compute_metrics(
    store: Store,
    activity_level: Union[ActivityLevel, str] = ActivityLevel.MODERATE,
    now: Optional[datetime] = None,
) -> MetricsSnapshot:
    """Compute every derived figure in one pass.

    Args:
        store: State to read
        activity_level: Level used for TDEE
        now: Reference time for monthly and daily figures (default: now)

    Returns:
        MetricsSnapshot
    """
    now = now or datetime.now()
    level = parse_activity_level(activity_level)
    bmi = get_bmi(store)

    return MetricsSnapshot(
        latest_weight=store.latest_weight(),
        target_weight=store.get_profile().target_weight,
        weight_to_target=weight_to_target(store),
        bmi=bmi,
        bmi_category=bmi_category(bmi),
        body_fat_estimate=get_body_fat_percentage(store),
        bmr=get_bmr(store),
        activity_level=level,
        tdee=get_tdee(store, level),
        monthly_calories_burned=monthly_calories_burned(store, now),
        monthly_distance=monthly_distance(store, now),
        daily_calorie_balance=daily_calorie_balance(store, now.date()),
    )
