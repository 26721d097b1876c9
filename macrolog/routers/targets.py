# macrolog/routers/targets.py
from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends

from macrolog.deps import current_date
from macrolog.schemas import (
    DailyTargetIn,
    DailyTargetOut,
    GoalTargetIn,
    GoalTargetOut,
    RemainingIn,
    RemainingOut,
)
from macrolog.services.constants import ACTIVITY_LABELS
from macrolog.services.targets import (
    calculate_daily_target,
    calculate_goal_based_target,
    calculate_remaining_calories,
)
from macrolog.services.weight import convert_to_kg

router = APIRouter()


@router.post("/daily", response_model=DailyTargetOut, summary="BMR x activity, minus weekly-goal deficit")
def daily_target(payload: DailyTargetIn):
    res = calculate_daily_target(payload.bmr, payload.activity_level, payload.weekly_weight_goal_kg)
    return {**asdict(res), "activity_label": ACTIVITY_LABELS[payload.activity_level]}


@router.post("/goal", response_model=GoalTargetOut, summary="Target from goal weight + target date")
def goal_target(payload: GoalTargetIn, today: date = Depends(current_date)):
    unit = payload.weight_unit
    goal_kg = None if payload.goal_weight_kg is None else convert_to_kg(payload.goal_weight_kg, unit)
    res = calculate_goal_based_target(
        payload.bmr,
        convert_to_kg(payload.current_weight_kg, unit),
        goal_kg,
        payload.target_date,
        payload.gender,
        today=today,
    )
    return asdict(res)


@router.post("/remaining", response_model=RemainingOut, summary="Calories left for the day")
def remaining(payload: RemainingIn):
    left = calculate_remaining_calories(
        payload.target_calories, payload.calories_consumed, payload.exercise_calories
    )
    return {"remaining_calories": left}
