# macrolog/services/constants.py
"""
Fixed tables shared by the calculation services.

Tables are built once at import time and exposed read-only (MappingProxyType).
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Literal

ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Gender = Literal["male", "female", "other", "prefer-not-to-say"]
BMRSource = Literal["inbody", "katch_mcardle", "mifflin_st_jeor", "none"]
Confidence = Literal["low", "medium", "high"]

# NEAT multipliers applied to BMR
ACTIVITY_MULTIPLIERS = MappingProxyType({
    "sedentary": 1.2,       # desk job, no exercise
    "light": 1.375,         # exercise 1-3 days/week
    "moderate": 1.55,       # exercise 3-5 days/week
    "active": 1.725,        # exercise 6-7 days/week
    "very_active": 1.9,     # athlete / physical job
})

ACTIVITY_LABELS = MappingProxyType({
    "sedentary": "Sedentary (desk job, no exercise)",
    "light": "Light (exercise 1-3 days/week)",
    "moderate": "Moderate (exercise 3-5 days/week)",
    "active": "Active (exercise 6-7 days/week)",
    "very_active": "Very Active (athlete/physical job)",
})

BMR_SOURCE_LABELS = MappingProxyType({
    "inbody": "Measured by InBody",
    "katch_mcardle": "Katch-McArdle formula (from body composition)",
    "mifflin_st_jeor": "Mifflin-St Jeor formula",
    "none": "Not available",
})

# 1 kg of body fat ~ 7700 kcal
KCAL_PER_KG = 7700

# Minimum safe daily intake; anyone not "male" gets the lower floor
CALORIE_FLOORS = MappingProxyType({
    "male": 1500,
    "female": 1200,
    "other": 1200,
    "prefer-not-to-say": 1200,
})
DEFAULT_CALORIE_FLOOR = 1200

# kg/week above which a goal is flagged as aggressive
AGGRESSIVE_WEEKLY_LOSS_KG = 1.0

# Reference grams for one "serving" when a meal does not declare one
DEFAULT_SERVING_SIZE_G = 100.0

# Grams per logged unit; "serving" is handled separately, ml assumes density 1
GRAMS_PER_UNIT = MappingProxyType({
    "g": 1.0,
    "ml": 1.0,
    "oz": 28.35,
})


def round_half_up(value: float) -> int:
    """
    Round .5 toward +inf (2062.5 -> 2063, -2.5 -> -2).

    Every rounded figure in the services goes through this, never the
    built-in round() (banker's rounding). Non-finite input raises ValueError.
    """
    if not math.isfinite(value):
        raise ValueError(f"cannot round non-finite value {value!r}")
    return int(math.floor(value + 0.5))


def round_half_up_to(value: float, places: int) -> float:
    """round_half_up at a decimal place: (0.4727, 2) -> 0.47."""
    scale = 10 ** places
    return round_half_up(value * scale) / scale
