"""Profile and history tracking.

Holds the data model (profile, weight log, workout log, daily stats) and
the Store container that owns it, plus snapshot serialization.
"""

from __future__ import annotations

from neofit.tracking.models import (
    BodyType,
    DailyStats,
    Gender,
    Theme,
    UserProfile,
    WeightEntry,
    Workout,
    WorkoutSource,
)
from neofit.tracking.serialization import deserialize_store, serialize_store
from neofit.tracking.store import Store

__all__ = [
    "BodyType",
    "DailyStats",
    "Gender",
    "Store",
    "Theme",
    "UserProfile",
    "WeightEntry",
    "Workout",
    "WorkoutSource",
    "deserialize_store",
    "serialize_store",
]
