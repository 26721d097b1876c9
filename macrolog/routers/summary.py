# macrolog/routers/summary.py
from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from macrolog.deps import current_date
from macrolog.routers.intake import to_catalog, to_log_entries
from macrolog.schemas import DayLogIn, DayTotalsIn, DayTotalsOut, WeeklySummaryIn, WeeklySummaryOut
from macrolog.services.summary import DayLog, calculate_day_totals, get_weekly_summary
from macrolog.services.tdee import WeighIn

router = APIRouter()


def _to_day_log(log: DayLogIn) -> DayLog:
    return DayLog(
        date=log.date,
        entries=to_log_entries(log.entries),
        workout_calories=log.workout_calories,
        resting_energy=log.resting_energy,
        active_energy=log.active_energy,
    )


@router.post("/day", response_model=DayTotalsOut, summary="Intake totals and energy balance for one day")
def day_totals(payload: DayTotalsIn):
    res = calculate_day_totals(
        _to_day_log(payload.log),
        to_catalog(payload.meals),
        payload.target_calories,
        payload.inbody_bmr,
    )
    return asdict(res)


@router.post("/week", response_model=Optional[WeeklySummaryOut], summary="Averages for the current Monday-Sunday week")
def weekly_summary(payload: WeeklySummaryIn, today: date = Depends(current_date)):
    """Returns null when no day of the week has meals or workout calories."""
    res = get_weekly_summary(
        [_to_day_log(log) for log in payload.logs],
        to_catalog(payload.meals),
        [WeighIn(**w.model_dump()) for w in payload.weigh_ins],
        today=today,
        target_calories=payload.target_calories,
        start_weight_kg=payload.start_weight_kg,
        goal_weight_kg=payload.goal_weight_kg,
        inbody_bmr=payload.inbody_bmr,
    )
    return asdict(res) if res else None
