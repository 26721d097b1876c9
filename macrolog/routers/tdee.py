# macrolog/routers/tdee.py
from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Depends

from macrolog.deps import current_date
from macrolog.schemas import TdeeCalibrationIn, TdeeCalibrationOut, TdeeDailyIn, TdeeDailyOut
from macrolog.services.tdee import (
    DayEnergy,
    WeighIn,
    calculate_apple_health_tdee,
    calculate_average_tdee,
    calculate_observed_tdee,
    get_daily_tdee_history,
)

router = APIRouter()


@router.post("/daily", response_model=TdeeDailyOut, summary="(resting + active) x TEF, and the day's deficit")
def daily_tdee(payload: TdeeDailyIn):
    res = calculate_apple_health_tdee(
        payload.resting_energy,
        payload.active_energy,
        payload.tef_multiplier,
        payload.calories_eaten,
    )
    return asdict(res)


@router.post("/calibration", response_model=TdeeCalibrationOut, summary="History, average and observed TDEE")
def tdee_calibration(payload: TdeeCalibrationIn, today: date = Depends(current_date)):
    days = [DayEnergy(**d.model_dump()) for d in payload.days]
    weigh_ins = [WeighIn(**w.model_dump()) for w in payload.weigh_ins]
    tef = payload.tef_multiplier

    history = get_daily_tdee_history(days, today=today, tef_multiplier=tef, window_days=payload.period_days)
    average = calculate_average_tdee(days, today=today, tef_multiplier=tef, window_days=payload.average_days)
    observed = calculate_observed_tdee(days, weigh_ins, today=today, tef_multiplier=tef, period_days=payload.period_days)
    return {
        "history": [asdict(h) for h in history],
        "average": asdict(average),
        "observed": asdict(observed) if observed else None,
    }
