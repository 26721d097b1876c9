# macrolog/services/tdee.py
"""
Energy expenditure from wearable health data, and its calibration against
the scale.

Daily:
    raw_tdee = resting_energy + active_energy
    tdee     = round(raw_tdee * tef_multiplier)        (TEF default 1.10)
    deficit  = tdee - calories_eaten

Observed (over `period_days`, default 14):
    start/end weight = 7-day rolling average at period start / today
    observed_tdee    = round(avg_eaten + 7700 * (start - end) / days_with_data)

Only days that carry a resting-energy reading count. Nothing here reads the
clock; `today` is always passed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional

from macrolog.services.constants import KCAL_PER_KG, Confidence, round_half_up, round_half_up_to

DEFAULT_TEF_MULTIPLIER = 1.10
TEF_MULTIPLIER_RANGE = (1.0, 1.25)
MIN_OBSERVED_DAYS = 7
ROLLING_WEIGHT_DAYS = 7
CALIBRATION_TOLERANCE = 0.10


@dataclass
class DayEnergy:
    date: date
    resting_energy: Optional[float] = None
    active_energy: Optional[float] = None
    calories_eaten: float = 0

    def has_resting(self) -> bool:
        return bool(self.resting_energy)


@dataclass
class WeighIn:
    date: date
    weight_kg: float


@dataclass
class TdeeResult:
    resting_energy: float
    active_energy: float
    raw_tdee: float
    tdee: int
    tef_multiplier: float
    calories_eaten: float
    deficit: float
    projected_weekly_loss_kg: float
    has_health_data: bool
    data_source: str  # "apple_health" | "none"


@dataclass
class DailyTdee:
    date: date
    resting_energy: float
    active_energy: float
    raw_tdee: float
    tdee: int
    calories_eaten: float
    deficit: float


@dataclass
class AverageTdee:
    avg_tdee: int
    days_with_data: int


@dataclass
class ObservedTdee:
    observed_tdee: int
    health_avg_tdee: int
    avg_calories_eaten: int
    weight_change_kg: float  # positive = loss
    days_analyzed: int
    suggested_tef_multiplier: float
    calibration_needed: bool
    confidence: Confidence


def _tdee(day: DayEnergy, tef_multiplier: float) -> int:
    return round_half_up(((day.resting_energy or 0) + (day.active_energy or 0)) * tef_multiplier)


def _days_in_window(days: Iterable[DayEnergy], start: date, end: date) -> List[DayEnergy]:
    return [d for d in days if start <= d.date <= end and d.has_resting()]


def calculate_apple_health_tdee(
    resting_energy: Optional[float] = None,
    active_energy: Optional[float] = None,
    tef_multiplier: float = DEFAULT_TEF_MULTIPLIER,
    calories_eaten: float = 0,
) -> TdeeResult:
    resting = resting_energy or 0
    active = active_energy or 0
    has_data = resting > 0

    raw = resting + active
    tdee = round_half_up(raw * tef_multiplier)
    deficit = tdee - calories_eaten

    return TdeeResult(
        resting_energy=resting,
        active_energy=active,
        raw_tdee=raw,
        tdee=tdee,
        tef_multiplier=tef_multiplier,
        calories_eaten=calories_eaten,
        deficit=deficit,
        projected_weekly_loss_kg=round_half_up_to(deficit * 7 / KCAL_PER_KG, 2),
        has_health_data=has_data,
        data_source="apple_health" if has_data else "none",
    )


def calculate_rolling_weight_average(
    weigh_ins: Iterable[WeighIn],
    target_date: date,
    window_days: int = ROLLING_WEIGHT_DAYS,
) -> Optional[float]:
    """Mean of weigh-ins in [target_date - window_days, target_date]; None below two readings."""
    start = target_date - timedelta(days=window_days)
    weights = [w.weight_kg for w in weigh_ins if start <= w.date <= target_date]
    if len(weights) < 2:
        return None
    return round_half_up_to(sum(weights) / len(weights), 2)


def get_daily_tdee_history(
    days: Iterable[DayEnergy],
    *,
    today: date,
    tef_multiplier: float = DEFAULT_TEF_MULTIPLIER,
    window_days: int = 14,
) -> List[DailyTdee]:
    history = []
    for day in _days_in_window(days, today - timedelta(days=window_days), today):
        tdee = _tdee(day, tef_multiplier)
        history.append(DailyTdee(
            date=day.date,
            resting_energy=day.resting_energy or 0,
            active_energy=day.active_energy or 0,
            raw_tdee=(day.resting_energy or 0) + (day.active_energy or 0),
            tdee=tdee,
            calories_eaten=day.calories_eaten,
            deficit=tdee - day.calories_eaten,
        ))
    return sorted(history, key=lambda h: h.date)


def calculate_average_tdee(
    days: Iterable[DayEnergy],
    *,
    today: date,
    tef_multiplier: float = DEFAULT_TEF_MULTIPLIER,
    window_days: int = 7,
) -> AverageTdee:
    window = _days_in_window(days, today - timedelta(days=window_days), today)
    if not window:
        return AverageTdee(avg_tdee=0, days_with_data=0)
    total = sum(_tdee(d, tef_multiplier) for d in window)
    return AverageTdee(avg_tdee=round_half_up(total / len(window)), days_with_data=len(window))


def _confidence_for(day_count: int) -> Confidence:
    if day_count >= 14:
        return "high"
    if day_count >= 10:
        return "medium"
    return "low"


def calculate_observed_tdee(
    days: Iterable[DayEnergy],
    weigh_ins: Iterable[WeighIn],
    *,
    today: date,
    tef_multiplier: float = DEFAULT_TEF_MULTIPLIER,
    period_days: int = 14,
) -> Optional[ObservedTdee]:
    """
    Back out expenditure from intake and the change in rolling-average weight,
    and suggest the TEF multiplier that would make the health-data estimate
    agree with it.

    Returns None without rolling averages at both ends of the period or with
    fewer than 7 days carrying resting energy.
    """
    weigh_ins = list(weigh_ins)
    period_start = today - timedelta(days=period_days)

    start_weight = calculate_rolling_weight_average(weigh_ins, period_start)
    end_weight = calculate_rolling_weight_average(weigh_ins, today)
    if start_weight is None or end_weight is None:
        return None

    window = _days_in_window(days, period_start, today)
    n = len(window)
    if n < MIN_OBSERVED_DAYS:
        return None

    avg_eaten = round_half_up(sum(d.calories_eaten for d in window) / n)
    health_avg = round_half_up(sum(_tdee(d, tef_multiplier) for d in window) / n)

    weight_change = start_weight - end_weight
    observed = round_half_up(avg_eaten + KCAL_PER_KG * weight_change / n)

    raw_avg = sum((d.resting_energy or 0) + (d.active_energy or 0) for d in window) / n
    suggested = round_half_up_to(observed / raw_avg, 2) if raw_avg > 0 else tef_multiplier
    low, high = TEF_MULTIPLIER_RANGE

    if observed > 0:
        calibration_needed = abs(health_avg - observed) / observed > CALIBRATION_TOLERANCE
    else:
        calibration_needed = True

    return ObservedTdee(
        observed_tdee=observed,
        health_avg_tdee=health_avg,
        avg_calories_eaten=avg_eaten,
        weight_change_kg=round_half_up_to(weight_change, 2),
        days_analyzed=n,
        suggested_tef_multiplier=max(low, min(high, suggested)),
        calibration_needed=calibration_needed,
        confidence=_confidence_for(n),
    )
