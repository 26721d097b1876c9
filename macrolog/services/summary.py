# macrolog/services/summary.py
"""
Per-day energy balance and the Monday-to-Sunday weekly summary.

Resting energy: latest InBody BMR, else the day's health resting energy, else 0.
Active energy:  the day's health active energy, else logged workout calories.

With both resting and active energy (has_tdee):
    deficit            = tdee - calories
    calories_remaining = tdee - calories
Otherwise, against the target:
    deficit            = target - (calories - active)
    calories_remaining = target - calories + active
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Union

from macrolog.services.constants import KCAL_PER_KG, round_half_up, round_half_up_to
from macrolog.services.intake import IntakeTotals, LogEntry, Meal, aggregate_intake
from macrolog.services.tdee import WeighIn

# kcal/day assumed for the goal projection when the week shows no deficit
DEFAULT_DAILY_DEFICIT = 500


@dataclass
class DayLog:
    date: date
    entries: List[Union[str, LogEntry, Mapping[str, Any]]] = field(default_factory=list)
    workout_calories: float = 0
    resting_energy: Optional[float] = None
    active_energy: Optional[float] = None

    def has_data(self) -> bool:
        return bool(self.entries) or self.workout_calories > 0


@dataclass
class DayTotals:
    date: date
    intake: IntakeTotals
    target_calories: float
    resting_energy: float
    active_energy: float
    tdee: float
    has_tdee: bool
    net_calories: float
    true_deficit: float
    deficit: float
    calories_remaining: float
    tdee_source: Optional[str]  # "inbody" | "apple_health" | None


@dataclass
class WeeklySummary:
    week_start: date
    week_end: date
    avg_calories: int
    avg_deficit: int
    week_weight_change: float
    days_logged: int
    latest_weight: Optional[float]
    weight_to_lose: Optional[float]
    weeks_to_goal: Optional[int]


def calculate_day_totals(
    log: DayLog,
    meal_catalog: Mapping[str, Meal],
    target_calories: float,
    inbody_bmr: Optional[float] = None,
) -> DayTotals:
    intake = aggregate_intake(log.entries, meal_catalog)
    calories = intake.calories

    resting = inbody_bmr or log.resting_energy or 0
    active = log.active_energy or log.workout_calories or 0
    tdee = resting + active
    has_tdee = resting > 0 and active > 0

    if inbody_bmr:
        source = "inbody"
    elif log.resting_energy:
        source = "apple_health"
    else:
        source = None

    net = calories - active
    true_deficit = tdee - calories if has_tdee else 0
    if has_tdee:
        deficit = true_deficit
        remaining = tdee - calories
    else:
        deficit = target_calories - net
        remaining = target_calories - calories + active

    return DayTotals(
        date=log.date,
        intake=intake,
        target_calories=target_calories,
        resting_energy=resting,
        active_energy=active,
        tdee=tdee,
        has_tdee=has_tdee,
        net_calories=net,
        true_deficit=true_deficit,
        deficit=deficit,
        calories_remaining=remaining,
        tdee_source=source,
    )


def week_bounds(today: date) -> tuple[date, date]:
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def get_weekly_summary(
    logs: Iterable[DayLog],
    meal_catalog: Mapping[str, Meal],
    weigh_ins: Iterable[WeighIn],
    *,
    today: date,
    target_calories: float,
    start_weight_kg: Optional[float] = None,
    goal_weight_kg: Optional[float] = None,
    inbody_bmr: Optional[float] = None,
) -> Optional[WeeklySummary]:
    """
    Averages over the days of the current week that have meals or workout
    calories; None when there are none.

    weeks_to_goal projects the remaining weight at the week's average daily
    deficit (500 kcal when that is not positive). It is None without a goal
    weight or any known weight, and 0 once the goal is reached.
    """
    week_start, week_end = week_bounds(today)
    logged = [log for log in logs if week_start <= log.date <= week_end and log.has_data()]
    if not logged:
        return None

    totals = [calculate_day_totals(log, meal_catalog, target_calories, inbody_bmr) for log in logged]
    n = len(totals)
    avg_calories = sum(t.intake.calories for t in totals) / n
    avg_deficit = sum(t.deficit for t in totals) / n

    weigh_ins = sorted(weigh_ins, key=lambda w: w.date)
    this_week = [w for w in weigh_ins if week_start <= w.date <= week_end]
    week_change = this_week[-1].weight_kg - this_week[0].weight_kg if len(this_week) >= 2 else 0

    latest = weigh_ins[-1].weight_kg if weigh_ins else start_weight_kg
    weight_to_lose = None
    weeks_to_goal = None
    if latest is not None and goal_weight_kg is not None:
        weight_to_lose = latest - goal_weight_kg
        daily_deficit = avg_deficit if avg_deficit > 0 else DEFAULT_DAILY_DEFICIT
        days_to_goal = weight_to_lose * KCAL_PER_KG / daily_deficit
        weeks_to_goal = max(0, math.ceil(days_to_goal / 7))

    return WeeklySummary(
        week_start=week_start,
        week_end=week_end,
        avg_calories=round_half_up(avg_calories),
        avg_deficit=round_half_up(avg_deficit),
        week_weight_change=round_half_up_to(week_change, 1),
        days_logged=n,
        latest_weight=latest,
        weight_to_lose=round_half_up_to(weight_to_lose, 1) if weight_to_lose is not None else None,
        weeks_to_goal=weeks_to_goal,
    )
