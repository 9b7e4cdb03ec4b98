"""Body metrics: formulas and store-level getters."""

from __future__ import annotations

from neofit.profiles.body_calc import (
    ACTIVITY_MULTIPLIERS,
    ActivityLevel,
    BMICategory,
    bmi_category,
    calculate_bmi,
    calculate_bmr,
    calculate_tdee,
    estimate_body_fat,
)
from neofit.profiles.metrics import MetricsSnapshot, compute_metrics

__all__ = [
    "ACTIVITY_MULTIPLIERS",
    "ActivityLevel",
    "BMICategory",
    "MetricsSnapshot",
    "bmi_category",
    "calculate_bmi",
    "calculate_bmr",
    "calculate_tdee",
    "compute_metrics",
    "estimate_body_fat",
]
