"""Data models for the profile, weight log, workout log and daily stats."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class Gender(Enum):
    """Gender used by the body-fat, BMR and avatar formulas."""
    MALE = "male"
    FEMALE = "female"


class BodyType(Enum):
    """Somatotype chosen in the profile (not used by any formula)."""
    ECTOMORPH = "ectomorph"
    MESOMORPH = "mesomorph"
    ENDOMORPH = "endomorph"


class WorkoutSource(Enum):
    """Where a workout record came from."""
    MANUAL = "manual"
    DEVICE = "device"


class Theme(Enum):
    """Display theme persisted with the rest of the state."""
    DARK = "dark"
    LIGHT = "light"


@dataclass
class UserProfile:
    """Body profile of the single local user.

    ``weight`` is the baseline weight entered with the profile. Once the
    weight log has entries, the latest entry takes precedence
    (see ``Store.latest_weight``).
    """

    gender: Gender = Gender.MALE
    age: int = 30
    height: float = 175.0  # cm
    weight: float = 80.0  # kg
    target_weight: float = 75.0  # kg
    body_fat: float = 20.0  # %
    body_type: BodyType = BodyType.MESOMORPH


@dataclass
class WeightEntry:
    """A single dated weight measurement."""

    id: str
    date: date
    weight: float  # kg
    note: Optional[str] = None


@dataclass
class Workout:
    """A logged training session."""

    id: str
    type: str
    date: datetime
    duration: float  # minutes
    calories_burned: float
    distance: Optional[float] = None  # km
    heart_rate: Optional[int] = None  # bpm
    source: WorkoutSource = WorkoutSource.MANUAL


@dataclass
class DailyStats:
    """Per-day calorie record, at most one per date."""

    date: date
    calories_consumed: float = 0.0
    calories_burned: float = 0.0
    weight: Optional[float] = None
    steps: Optional[int] = None
    distance: Optional[float] = None

    @property
    def calorie_balance(self) -> float:
        """Consumed minus burned calories for the day."""
        return self.calories_consumed - self.calories_burned


def naive_local(moment: datetime) -> datetime:
    """Convert an offset-aware timestamp to naive local time.

    Workout timestamps are compared with ``datetime.now()``, so every stored
    timestamp is naive. Naive input is returned unchanged.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)
