"""State container for the profile, weight log, workout log and daily stats.

A ``Store`` is created explicitly (usually by ``SnapshotRepository.load``) and
passed to the metrics, avatar and reporting functions. Those functions only
read it. Mutations validate their input first and then apply in a single
step, so a rejected call leaves the state untouched.

Listeners registered with ``subscribe`` are called after every successful
mutation; the snapshot repository uses this to re-serialize the state.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from datetime import date, datetime
from typing import Any, Callable, Optional

from neofit.errors import InvalidArgument, ValidationError
from neofit.tracking.models import (
    DailyStats,
    Theme,
    UserProfile,
    WeightEntry,
    Workout,
    WorkoutSource,
    naive_local,
)

logger = logging.getLogger(__name__)

Listener = Callable[["Store"], None]

_PROFILE_FIELDS = frozenset(f.name for f in dataclasses.fields(UserProfile))


class Store:
    """Mutable application state with getters and explicit mutations."""

    def __init__(
        self,
        profile: Optional[UserProfile] = None,
        weight_entries: Optional[list[WeightEntry]] = None,
        workouts: Optional[list[Workout]] = None,
        daily_stats: Optional[list[DailyStats]] = None,
        theme: Theme = Theme.DARK,
    ):
        """Initialize the store.

        Args:
            profile: Starting profile (defaults to ``UserProfile()``)
            weight_entries: Existing weight log, in any order
            workouts: Existing workout log
            daily_stats: Existing daily records
            theme: Display theme
        """
        self._profile = profile or UserProfile()
        self._weight_entries = _sorted_newest_first(weight_entries or [])
        self._workouts = [
            dataclasses.replace(w, date=naive_local(w.date)) for w in workouts or []
        ]
        self._daily_stats: dict[date, DailyStats] = {}
        for stats in daily_stats or []:
            self._daily_stats[stats.date] = stats
        self._theme = theme
        self._listeners: list[Listener] = []
        self._last_id = 0

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after each mutation.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, action: str) -> None:
        logger.debug("store mutation: %s", action)
        for listener in list(self._listeners):
            listener(self)

    def _next_id(self) -> str:
        # Nanosecond clock, bumped so ids stay unique within a burst of calls
        self._last_id = max(time.time_ns(), self._last_id + 1)
        return str(self._last_id)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self) -> UserProfile:
        return self._profile

    def set_profile(self, **changes: Any) -> UserProfile:
        """Shallow-merge ``changes`` into the profile and return the result.

        Values are not validated here. Unknown field names raise
        InvalidArgument.
        """
        unknown = set(changes) - _PROFILE_FIELDS
        if unknown:
            raise InvalidArgument(f"Unknown profile fields: {sorted(unknown)}")

        self._profile = dataclasses.replace(self._profile, **changes)
        self._notify("set_profile")
        return self._profile

    # ------------------------------------------------------------------
    # Weight log
    # ------------------------------------------------------------------

    @property
    def weight_entries(self) -> list[WeightEntry]:
        """Weight log, newest first. Returns a copy."""
        return list(self._weight_entries)

    def add_weight_entry(
        self,
        entry_date: date,
        weight: float,
        note: Optional[str] = None,
    ) -> WeightEntry:
        """Add a weight measurement and keep the log sorted newest first.

        Entries sharing a date keep their insertion order.

        Raises:
            ValidationError: If weight is not positive
        """
        _check_weight(weight)

        entry = WeightEntry(id=self._next_id(), date=entry_date, weight=weight, note=note)
        self._weight_entries = _sorted_newest_first(self._weight_entries + [entry])
        self._notify("add_weight_entry")
        return entry

    def update_weight_entry(
        self,
        entry_id: str,
        entry_date: Optional[date] = None,
        weight: Optional[float] = None,
        note: Optional[str] = None,
    ) -> Optional[WeightEntry]:
        """Update fields of an existing entry and re-sort the log.

        Returns:
            The updated entry, or None if no entry has that id
        """
        if weight is not None:
            _check_weight(weight)

        for i, entry in enumerate(self._weight_entries):
            if entry.id == entry_id:
                break
        else:
            return None

        changes: dict[str, Any] = {}
        if entry_date is not None:
            changes["date"] = entry_date
        if weight is not None:
            changes["weight"] = weight
        if note is not None:
            changes["note"] = note

        updated = dataclasses.replace(entry, **changes)
        entries = list(self._weight_entries)
        entries[i] = updated
        self._weight_entries = _sorted_newest_first(entries)
        self._notify("update_weight_entry")
        return updated

    def delete_weight_entry(self, entry_id: str) -> bool:
        """Remove a weight entry. Unknown ids are ignored.

        Returns:
            True if an entry was removed
        """
        remaining = [e for e in self._weight_entries if e.id != entry_id]
        if len(remaining) == len(self._weight_entries):
            return False
        self._weight_entries = remaining
        self._notify("delete_weight_entry")
        return True

    def latest_weight(self) -> float:
        """Current weight: newest log entry, else the profile weight.

        All weight-dependent metrics go through this accessor.
        """
        if self._weight_entries:
            return self._weight_entries[0].weight
        return self._profile.weight

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    @property
    def workouts(self) -> list[Workout]:
        """Workout log in insertion order. Returns a copy."""
        return list(self._workouts)

    def add_workout(
        self,
        type: str,
        date: datetime,
        duration: float,
        calories_burned: float,
        distance: Optional[float] = None,
        heart_rate: Optional[int] = None,
        source: WorkoutSource = WorkoutSource.MANUAL,
    ) -> Workout:
        """Append a workout to the log.

        Raises:
            ValidationError: If duration <= 0 or calories_burned < 0
        """
        if not duration > 0:
            raise ValidationError(f"duration must be positive, got {duration}")
        if not calories_burned >= 0:
            raise ValidationError(
                f"calories_burned must not be negative, got {calories_burned}"
            )

        workout = Workout(
            id=self._next_id(),
            type=type,
            date=naive_local(date),
            duration=duration,
            calories_burned=calories_burned,
            distance=distance,
            heart_rate=heart_rate,
            source=source,
        )
        self._workouts.append(workout)
        self._notify("add_workout")
        return workout

    def delete_workout(self, workout_id: str) -> bool:
        """Remove a workout. Unknown ids are ignored.

        Returns:
            True if a workout was removed
        """
        remaining = [w for w in self._workouts if w.id != workout_id]
        if len(remaining) == len(self._workouts):
            return False
        self._workouts = remaining
        self._notify("delete_workout")
        return True

    # ------------------------------------------------------------------
    # Daily stats
    # ------------------------------------------------------------------

    @property
    def daily_stats(self) -> list[DailyStats]:
        """Daily records sorted by date."""
        return [self._daily_stats[d] for d in sorted(self._daily_stats)]

    def add_daily_stats(self, stats: DailyStats) -> DailyStats:
        """Insert or replace the record for ``stats.date``."""
        self._daily_stats[stats.date] = stats
        self._notify("add_daily_stats")
        return stats

    def get_daily_stats(self, day: date) -> Optional[DailyStats]:
        return self._daily_stats.get(day)

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self._notify("set_theme")


def _check_weight(weight: float) -> None:
    if not weight > 0:
        raise ValidationError(f"weight must be positive, got {weight}")


def _sorted_newest_first(entries: list[WeightEntry]) -> list[WeightEntry]:
    # sorted() is stable with reverse=True, so equal dates keep insertion order
    return sorted(entries, key=lambda e: e.date, reverse=True)
