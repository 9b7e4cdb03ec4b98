"""Serialization utilities for Store snapshot round-trip.

These functions turn a Store into a JSON-serializable dict and back. Calendar
dates are written as ``YYYY-MM-DD``, workout timestamps as full ISO-8601
strings and ids as strings, so a snapshot reloads identically regardless of
locale. Missing keys fall back to defaults, which makes an empty dict a valid
snapshot of a fresh store.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from neofit.tracking.models import (
    BodyType,
    DailyStats,
    Gender,
    Theme,
    UserProfile,
    WeightEntry,
    Workout,
    WorkoutSource,
    naive_local,
)
from neofit.tracking.store import Store

SNAPSHOT_VERSION = 1


def serialize_profile(profile: UserProfile) -> dict[str, Any]:
    return {
        "gender": profile.gender.value,
        "age": profile.age,
        "height": profile.height,
        "weight": profile.weight,
        "target_weight": profile.target_weight,
        "body_fat": profile.body_fat,
        "body_type": profile.body_type.value,
    }


def deserialize_profile(data: dict[str, Any]) -> UserProfile:
    default = UserProfile()
    return UserProfile(
        gender=Gender(data.get("gender", default.gender.value)),
        age=int(data.get("age", default.age)),
        height=float(data.get("height", default.height)),
        weight=float(data.get("weight", default.weight)),
        target_weight=float(data.get("target_weight", default.target_weight)),
        body_fat=float(data.get("body_fat", default.body_fat)),
        body_type=BodyType(data.get("body_type", default.body_type.value)),
    )


def serialize_workout(workout: Workout) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": workout.id,
        "type": workout.type,
        "date": workout.date.isoformat(),
        "duration": workout.duration,
        "calories_burned": workout.calories_burned,
        "source": workout.source.value,
    }
    if workout.distance is not None:
        data["distance"] = workout.distance
    if workout.heart_rate is not None:
        data["heart_rate"] = workout.heart_rate
    return data


def deserialize_workout(data: dict[str, Any]) -> Workout:
    """Build a Workout from its dict form.

    Timestamps carrying a UTC offset are converted to naive local time.
    """
    return Workout(
        id=str(data["id"]),
        type=data["type"],
        date=naive_local(datetime.fromisoformat(data["date"])),
        duration=float(data["duration"]),
        calories_burned=float(data["calories_burned"]),
        distance=data.get("distance"),
        heart_rate=data.get("heart_rate"),
        source=WorkoutSource(data.get("source", WorkoutSource.MANUAL.value)),
    )


def serialize_store(store: Store) -> dict[str, Any]:
    """Convert a Store to a JSON-serializable dict.

    Args:
        store: Store to serialize

    Returns:
        Dictionary accepted by deserialize_store()
    """
    weight_entries = []
    for entry in store.weight_entries:
        item: dict[str, Any] = {
            "id": entry.id,
            "date": entry.date.isoformat(),
            "weight": entry.weight,
        }
        if entry.note is not None:
            item["note"] = entry.note
        weight_entries.append(item)

    daily_stats = []
    for stats in store.daily_stats:
        item = {
            "date": stats.date.isoformat(),
            "calories_consumed": stats.calories_consumed,
            "calories_burned": stats.calories_burned,
        }
        # Optional measurements only when recorded
        for key in ("weight", "steps", "distance"):
            value = getattr(stats, key)
            if value is not None:
                item[key] = value
        daily_stats.append(item)

    return {
        "version": SNAPSHOT_VERSION,
        "profile": serialize_profile(store.get_profile()),
        "weight_entries": weight_entries,
        "workouts": [serialize_workout(w) for w in store.workouts],
        "daily_stats": daily_stats,
        "theme": store.theme.value,
    }


def deserialize_store(data: dict[str, Any]) -> Store:
    """Rebuild a Store from a dict produced by serialize_store().

    Args:
        data: Snapshot dict (may be empty)

    Returns:
        New Store instance
    """
    weight_entries = [
        WeightEntry(
            id=str(item["id"]),
            date=date.fromisoformat(item["date"]),
            weight=float(item["weight"]),
            note=item.get("note"),
        )
        for item in data.get("weight_entries", [])
    ]

    daily_stats = [
        DailyStats(
            date=date.fromisoformat(item["date"]),
            calories_consumed=float(item.get("calories_consumed", 0.0)),
            calories_burned=float(item.get("calories_burned", 0.0)),
            weight=item.get("weight"),
            steps=item.get("steps"),
            distance=item.get("distance"),
        )
        for item in data.get("daily_stats", [])
    ]

    return Store(
        profile=deserialize_profile(data.get("profile", {})),
        weight_entries=weight_entries,
        workouts=[deserialize_workout(w) for w in data.get("workouts", [])],
        daily_stats=daily_stats,
        theme=Theme(data.get("theme", Theme.DARK.value)),
    )
