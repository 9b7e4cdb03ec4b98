"""Body composition formulas.

Calculates BMI, an estimated body-fat percentage, BMR and TDEE from body
metrics. All inputs are metric (kg, cm, years).

Uses the Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate, and the Deurenberg regression for
estimating body fat from BMI, age and gender.

None of these functions clamp their results. Extreme inputs give extreme
(even negative) outputs, which is preferable to hiding bad data.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from neofit.errors import InvalidArgument
from neofit.tracking.models import Gender


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    ACTIVE = "active"                # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"      # Very hard exercise, twice a day


class BMICategory(Enum):
    """WHO weight classification by BMI."""
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# Deurenberg constant term by gender
BODY_FAT_OFFSETS = {
    Gender.MALE: -16.2,
    Gender.FEMALE: -5.4,
}


def parse_activity_level(activity_level: Union[ActivityLevel, str]) -> ActivityLevel:
    """Coerce a string key to ActivityLevel.

    Raises:
        InvalidArgument: If the key is not one of the five known levels
    """
    if isinstance(activity_level, ActivityLevel):
        return activity_level
    try:
        return ActivityLevel(str(activity_level).lower())
    except ValueError:
        valid = [level.value for level in ActivityLevel]
        raise InvalidArgument(
            f"activity_level must be one of {valid}, got '{activity_level}'"
        ) from None


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Calculate Body Mass Index.

    Height must be positive. A zero height is not rejected: the result is
    ``inf`` (or ``nan`` for zero weight) and the caller has to guard it.

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters

    Returns:
        BMI in kg/m²
    """
    height_m = height_cm / 100
    height_sq = height_m * height_m
    if height_sq == 0:
        return float("nan") if weight_kg == 0 else float("inf") * weight_kg
    return weight_kg / height_sq


def estimate_body_fat(bmi: float, age: int, gender: Gender) -> float:
    """Estimate body fat percentage with the Deurenberg formula.

    Args:
        bmi: Body Mass Index
        age: Age in years
        gender: Gender

    Returns:
        Estimated body fat in percent (unclamped)
    """
    return (1.20 * bmi) + (0.23 * age) + BODY_FAT_OFFSETS[gender]


def calculate_bmr(
    age: int,
    gender: Gender,
    height_cm: float,
    weight_kg: float,
) -> float:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Args:
        age: Age in years
        gender: Gender
        height_cm: Height in centimeters
        weight_kg: Weight in kilograms

    Returns:
        BMR in calories per day
    """
    if gender == Gender.MALE:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) + 5
    else:
        bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age) - 161

    return bmr


def calculate_tdee(
    bmr: float,
    activity_level: Union[ActivityLevel, str],
) -> float:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level (enum or its string value)

    Returns:
        TDEE in calories per day

    Raises:
        InvalidArgument: For an unknown activity level
    """
    multiplier = ACTIVITY_MULTIPLIERS[parse_activity_level(activity_level)]
    return bmr * multiplier


def bmi_category(bmi: float) -> BMICategory:
    """Classify a BMI value (<18.5, <25, <30, rest)."""
    if bmi < 18.5:
        return BMICategory.UNDERWEIGHT
    if bmi < 25:
        return BMICategory.NORMAL
    if bmi < 30:
        return BMICategory.OVERWEIGHT
    return BMICategory.OBESE
