"""Pluggable sources of workouts recorded by external devices.

No device protocol is implemented here. A ``DeviceDataSource`` only has to
yield ``DeviceWorkout`` records; ``sync_device_workouts`` validates them
through the Store like any manual entry.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Protocol

from neofit.errors import ValidationError
from neofit.tracking.models import Workout, WorkoutSource, naive_local
from neofit.tracking.store import Store

logger = logging.getLogger(__name__)


@dataclass
class DeviceWorkout:
    """Workout as reported by a device, before it gets a store id."""

    type: str
    date: datetime
    duration: float
    calories_burned: float
    distance: Optional[float] = None
    heart_rate: Optional[int] = None


class DeviceDataSource(Protocol):
    """Anything that can produce workouts recorded by a device."""

    name: str

    def fetch_workouts(self) -> Iterable[DeviceWorkout]:
        ...


class JSONFileDeviceSource:
    """Reads workouts from a JSON export (a list of objects).

    Each object needs ``type``, ``date`` (ISO-8601), ``duration`` and
    ``calories_burned``; ``distance`` and ``heart_rate`` are optional.
    """

    def __init__(self, path: Path, name: Optional[str] = None):
        self.path = path
        self.name = name or path.stem

    def fetch_workouts(self) -> list[DeviceWorkout]:
        with open(self.path) as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValidationError(f"{self.path}: expected a JSON list of workouts")

        workouts = []
        for i, item in enumerate(data):
            try:
                workouts.append(
                    DeviceWorkout(
                        type=str(item["type"]),
                        date=datetime.fromisoformat(item["date"]),
                        duration=float(item["duration"]),
                        calories_burned=float(item["calories_burned"]),
                        distance=item.get("distance"),
                        heart_rate=item.get("heart_rate"),
                    )
                )
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError(f"{self.path}: workout #{i} is invalid: {e}") from e
        return workouts


def _already_imported(store: Store, workout: DeviceWorkout) -> bool:
    moment = naive_local(workout.date)
    return any(
        w.source == WorkoutSource.DEVICE and w.date == moment and w.type == workout.type
        for w in store.workouts
    )


def sync_device_workouts(
    store: Store,
    source: DeviceDataSource,
    skip_existing: bool = True,
) -> list[Workout]:
    """Add every workout from ``source`` to the store as a device workout.

    Args:
        store: Store to update
        source: Device data source
        skip_existing: Skip workouts already imported with the same date and type

    Returns:
        The workouts that were added

    Raises:
        ValidationError: If a device workout fails store validation. Workouts
            added before the failing one stay in the store.
    """
    added = []
    for item in source.fetch_workouts():
        if skip_existing and _already_imported(store, item):
            continue
        added.append(
            store.add_workout(
                type=item.type,
                date=item.date,
                duration=item.duration,
                calories_burned=item.calories_burned,
                distance=item.distance,
                heart_rate=item.heart_rate,
                source=WorkoutSource.DEVICE,
            )
        )

    logger.debug("imported %d workouts from %s", len(added), source.name)
    return added
