# macrolog/services/goals.py
"""
Personalized daily nutrition goals.

- Fiber:   14 g per 1000 kcal (USDA); age/sex fallback when no calorie target
- Sugar:   AHA added-sugar cap, 36 g men / 25 g everyone else
- Protein: g per kg body weight, scaled by activity level
- Carbs:   ~50% of calories (4 kcal/g)
- Fat:     ~30% of calories (9 kcal/g)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from macrolog.services.constants import ActivityLevel, Gender, round_half_up

PROTEIN_G_PER_KG = {
    "sedentary": 0.8,
    "light": 1.0,
    "moderate": 1.2,
    "active": 1.4,
    "very_active": 1.6,
}


@dataclass
class NutritionGoals:
    calories_min: float
    calories_max: float
    protein: int
    carbs: int
    fat: int
    fiber: int
    sugar: int


def _fiber_fallback(age: int, gender: Optional[Gender]) -> int:
    if gender == "male":
        return 30 if age >= 51 else 38
    return 21 if age >= 51 else 25


def calculate_nutrition_goals(
    age: int,
    gender: Optional[Gender],
    weight_kg: float,
    calorie_target: float,
    activity_level: ActivityLevel = "light",
) -> NutritionGoals:
    if calorie_target > 0:
        fiber = round_half_up(calorie_target / 1000 * 14)
    else:
        fiber = _fiber_fallback(age, gender)

    protein_per_kg = PROTEIN_G_PER_KG.get(activity_level, 1.0)

    return NutritionGoals(
        calories_min=calorie_target * 0.9,
        calories_max=calorie_target * 1.1,
        protein=round_half_up(weight_kg * protein_per_kg),
        carbs=round_half_up(calorie_target * 0.50 / 4),
        fat=round_half_up(calorie_target * 0.30 / 9),
        fiber=fiber,
        sugar=36 if gender == "male" else 25,
    )


def default_nutrition_goals(calorie_target: float = 2000) -> NutritionGoals:
    """Goals for an incomplete profile (adult RDA averages)."""
    return NutritionGoals(
        calories_min=calorie_target * 0.9,
        calories_max=calorie_target * 1.1,
        protein=50,
        carbs=250,
        fat=65,
        fiber=28,
        sugar=30,
    )


def calculate_age(date_of_birth: date, today: date) -> int:
    years = today.year - date_of_birth.year
    if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def calculate_progress(current: float, goal: float) -> int:
    if goal <= 0:
        return 0
    return min(100, round_half_up(current / goal * 100))


def get_progress_status(current: float, goal: float, goal_type: str) -> str:
    """
    goal_type "minimum" (fiber, protein): reaching the goal is good.
    goal_type "maximum" (sugar): staying under is good.
    Uses the uncapped percentage so an exceeded maximum reads as "danger".
    """
    pct = round_half_up(current / goal * 100) if goal > 0 else 0
    if goal_type == "minimum":
        if pct >= 100:
            return "good"
        if pct >= 70:
            return "warning"
        return "danger"

    if pct <= 75:
        return "good"
    if pct <= 100:
        return "warning"
    return "danger"
