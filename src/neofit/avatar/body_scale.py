"""Avatar proportions derived from the body profile.

Maps height, BMI, body fat and gender onto dimensionless multipliers for a
3D body model. A 175 cm male at BMI 22 with 15% body fat scales to 1.0 on
every axis. The renderer applies the factors; no geometry is described here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from neofit.profiles.body_calc import calculate_bmi
from neofit.tracking.models import Gender, UserProfile
from neofit.tracking.store import Store

REFERENCE_HEIGHT_M = 1.75
REFERENCE_BMI = 22.0
REFERENCE_BODY_FAT = 15.0

WIDTH_EXPONENT = 0.4
GENDER_WIDTH_FACTORS = {
    Gender.MALE: 1.0,
    Gender.FEMALE: 0.88,
}

MUSCLE_MIN = 0.75
MUSCLE_MAX = 1.25


@dataclass(frozen=True)
class BodyScale:
    """Scale factors consumed by the avatar renderer."""

    height: float
    width: float
    muscle: float
    definition: float
    bmi: float

    def to_dict(self) -> dict:
        return {
            "height": self.height,
            "width": self.width,
            "muscle": self.muscle,
            "definition": self.definition,
            "bmi": self.bmi,
        }


def compute_body_scale(profile: UserProfile, weight_kg: Optional[float] = None) -> BodyScale:
    """Compute avatar scale factors.

    Args:
        profile: Body profile
        weight_kg: Weight to use. Defaults to ``profile.weight``; pass
            ``store.latest_weight()`` to follow the weight log.

    Returns:
        BodyScale
    """
    weight = profile.weight if weight_kg is None else weight_kg

    height_scale = profile.height / 100 / REFERENCE_HEIGHT_M
    bmi = calculate_bmi(weight, profile.height)

    bmi_ratio = bmi / REFERENCE_BMI
    # A negative ratio would make the power complex; report nan instead
    if bmi_ratio >= 0:
        width = bmi_ratio ** WIDTH_EXPONENT * GENDER_WIDTH_FACTORS[profile.gender]
    else:
        width = float("nan")

    # Body fat affects overall roundness
    body_fat_factor = 1 + (profile.body_fat - REFERENCE_BODY_FAT) * 0.01
    width *= body_fat_factor

    # Lower BMI reads as more muscular
    muscle = max(MUSCLE_MIN, min(MUSCLE_MAX, 1.4 - (bmi - REFERENCE_BMI) * 0.04))

    # Floored at 0 only; values above 1 are kept for low BMI
    definition = max(0.0, 1 - (bmi - REFERENCE_BMI) * 0.03)

    return BodyScale(
        height=height_scale,
        width=width,
        muscle=muscle,
        definition=definition,
        bmi=bmi,
    )


def body_scale_for(store: Store) -> BodyScale:
    """Avatar scale for the store's profile at its latest logged weight."""
    return compute_body_scale(store.get_profile(), store.latest_weight())
