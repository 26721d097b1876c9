# macrolog/services/targets.py
"""
Daily calorie targets.

Two entry points:

- calculate_daily_target: MyFitnessPal-style
      base    = BMR * activity multiplier
      deficit = weekly_weight_goal_kg * 7700 / 7
      target  = base - deficit
  The sign arithmetic is literal: a negative (loss) goal yields a negative
  deficit and therefore a *higher* target. Callers rely on the exact figures.

- calculate_goal_based_target: derives the weekly rate from a goal weight and
  a target date. Targets BMR directly (no activity multiplier) and clamps to
  a minimum safe intake (1500 male, 1200 everyone else).

"today" is always passed in; nothing here reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from macrolog.services.constants import (
    ACTIVITY_MULTIPLIERS,
    AGGRESSIVE_WEEKLY_LOSS_KG,
    CALORIE_FLOORS,
    DEFAULT_CALORIE_FLOOR,
    KCAL_PER_KG,
    ActivityLevel,
    Gender,
    round_half_up,
)


@dataclass
class DailyTargetResult:
    base_calories: int
    target_calories: int
    deficit: int


@dataclass
class GoalBasedTargetResult(DailyTargetResult):
    daily_deficit: int
    weekly_weight_loss: float
    is_aggressive: bool
    is_too_low: bool


def calculate_daily_target(bmr: float, activity_level: ActivityLevel, weekly_weight_goal_kg: float = 0) -> DailyTargetResult:
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level)
    if multiplier is None:
        raise ValueError(f"unknown activity level: {activity_level!r}")

    base = round_half_up(bmr * multiplier)
    deficit = round_half_up(weekly_weight_goal_kg * KCAL_PER_KG / 7)
    return DailyTargetResult(base_calories=base, target_calories=base - deficit, deficit=deficit)


def calculate_remaining_calories(target_calories: float, calories_consumed: float, exercise_calories: float = 0) -> float:
    # exercise is added back as a bonus
    return target_calories + exercise_calories - calories_consumed


def _coerce_date(v: Union[date, str, None]) -> Optional[date]:
    if v is None:
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    try:
        return date.fromisoformat(v[:10])
    except ValueError:
        return None


def calorie_floor_for(gender: Optional[Gender]) -> int:
    return CALORIE_FLOORS.get(gender or "", DEFAULT_CALORIE_FLOOR)


def _bmr_as_target(bmr: float) -> GoalBasedTargetResult:
    base = round_half_up(bmr)
    return GoalBasedTargetResult(
        base_calories=base,
        target_calories=base,
        deficit=0,
        daily_deficit=0,
        weekly_weight_loss=0.0,
        is_aggressive=False,
        is_too_low=False,
    )


def calculate_goal_based_target(
    bmr: float,
    current_weight_kg: float,
    goal_weight_kg: Optional[float] = None,
    target_date: Union[date, str, None] = None,
    gender: Optional[Gender] = None,
    *,
    today: date,
) -> GoalBasedTargetResult:
    """
    Goal-driven target for a weight-loss timeline.

    Falls back to BMR-as-target (no deficit) when the goal is missing, not a
    loss (goal >= current), non-positive, or the target date is not in the future.
    """
    goal_day = _coerce_date(target_date)
    if goal_weight_kg is None or goal_day is None:
        return _bmr_as_target(bmr)
    if current_weight_kg <= 0 or goal_weight_kg <= 0 or goal_weight_kg >= current_weight_kg:
        return _bmr_as_target(bmr)

    days_remaining = (goal_day - today).days
    if days_remaining <= 0:
        return _bmr_as_target(bmr)

    weight_to_lose = current_weight_kg - goal_weight_kg
    weekly_weight_loss = weight_to_lose / (days_remaining / 7)
    daily_deficit = round_half_up(weight_to_lose * KCAL_PER_KG / days_remaining)

    base = round_half_up(bmr)
    target = base - daily_deficit

    floor = calorie_floor_for(gender)
    is_too_low = target < floor
    if is_too_low:
        target = floor

    return GoalBasedTargetResult(
        base_calories=base,
        target_calories=target,
        deficit=daily_deficit,
        daily_deficit=daily_deficit,
        weekly_weight_loss=weekly_weight_loss,
        is_aggressive=abs(weekly_weight_loss) > AGGRESSIVE_WEEKLY_LOSS_KG,
        is_too_low=is_too_low,
    )
