# macrolog/routers/goals.py
from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends

from macrolog.deps import current_date
from macrolog.schemas import NutritionGoalsIn, NutritionGoalsOut
from macrolog.services.goals import (
    calculate_age,
    calculate_nutrition_goals,
    default_nutrition_goals,
)

router = APIRouter()


@router.post("/nutrition", response_model=NutritionGoalsOut, summary="Daily macro/fiber/sugar goals")
def nutrition_goals(payload: NutritionGoalsIn, today: date = Depends(current_date)):
    age = payload.age_years
    if age is None and payload.date_of_birth is not None:
        age = calculate_age(payload.date_of_birth, today)

    # incomplete profile -> generic adult goals
    if age is None or payload.weight_kg is None or payload.gender is None:
        return {**asdict(default_nutrition_goals(payload.calorie_target)), "personalized": False}

    goals = calculate_nutrition_goals(
        age, payload.gender, payload.weight_kg, payload.calorie_target, payload.activity_level
    )
    return {**asdict(goals), "personalized": True}
