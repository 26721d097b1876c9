# macrolog/schemas.py
from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from macrolog.services.constants import ActivityLevel, BMRSource, Confidence, Gender

ActivityLevelIn = ActivityLevel
GenderIn = Gender
WeightUnitIn = Literal["kg", "lbs"]

# upper bound for any logged amount (grams, servings, kcal per meal)
MAX_AMOUNT = 100_000


class Payload(BaseModel):
    # NaN / +-inf never reach the services
    model_config = ConfigDict(allow_inf_nan=False)


# ---------- BMR ----------


class ProfileIn(Payload):
    # all optional; whatever the user has entered so far
    inbody_bmr: float | None = None
    lean_body_mass_kg: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    age_years: float | None = None
    date_of_birth: dt.date | None = None  # used when age_years is missing
    gender: GenderIn | None = None
    weight_unit: WeightUnitIn = "kg"  # unit of weight_kg / lean_body_mass_kg as sent


class BMROut(BaseModel):
    bmr: float
    source: BMRSource
    source_label: str
    can_calculate: bool
    missing_fields: list[str]


# ---------- Targets ----------


class DailyTargetIn(Payload):
    bmr: float = Field(..., ge=0, le=MAX_AMOUNT)
    activity_level: ActivityLevelIn
    weekly_weight_goal_kg: float = 0


class DailyTargetOut(BaseModel):
    base_calories: int
    target_calories: int
    deficit: int
    activity_label: str


class GoalTargetIn(Payload):
    bmr: float = Field(..., ge=0, le=MAX_AMOUNT)
    current_weight_kg: float
    goal_weight_kg: float | None = None
    target_date: dt.date | None = None
    gender: GenderIn | None = None
    weight_unit: WeightUnitIn = "kg"


class GoalTargetOut(BaseModel):
    base_calories: int
    target_calories: int
    deficit: int
    daily_deficit: int
    weekly_weight_loss: float
    is_aggressive: bool
    is_too_low: bool


class RemainingIn(Payload):
    target_calories: float
    calories_consumed: float
    exercise_calories: float = 0


class RemainingOut(BaseModel):
    remaining_calories: float


# ---------- Intake ----------


class MealIn(Payload):
    id: str
    calories: float = Field(..., ge=0, le=MAX_AMOUNT)
    protein: float = Field(0, ge=0, le=MAX_AMOUNT)
    carbs: float = Field(0, ge=0, le=MAX_AMOUNT)
    fat: float = Field(0, ge=0, le=MAX_AMOUNT)
    fiber: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    sugar: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    serving_size: float | None = Field(None, gt=0, le=MAX_AMOUNT)


class LogEntryIn(Payload):
    meal_id: str = Field(..., validation_alias=AliasChoices("meal_id", "mealId"))
    quantity: float = Field(1, ge=0, le=MAX_AMOUNT)
    unit: str = "serving"  # serving | g | oz | ml; anything else counts as servings


class IntakeIn(Payload):
    entries: list[str | LogEntryIn]
    meals: list[MealIn]


class IntakeOut(BaseModel):
    calories: int
    protein: int
    carbs: int
    fat: int
    fiber: int
    sugar: int
    unresolved_meal_ids: list[str]


class MultiplierOut(BaseModel):
    quantity: float
    unit: str
    serving_size: float | None
    multiplier: float


# ---------- Activity ----------


class HealthSampleIn(Payload):
    date: dt.date
    steps: int | None = Field(None, ge=0)
    exercise_minutes: int | None = Field(None, ge=0)


class ActivityIn(Payload):
    samples: list[HealthSampleIn]
    current_level: ActivityLevelIn | None = None
    window_days: int | None = Field(None, ge=1, le=366)


class ActivityOut(BaseModel):
    recommended_level: ActivityLevel
    current_level: ActivityLevel | None
    should_recommend: bool
    avg_steps: int
    avg_exercise_minutes: int
    days_with_exercise: int
    days_analyzed: int
    confidence: Confidence
    reason: str


# ---------- Nutrition goals ----------


class NutritionGoalsIn(Payload):
    age_years: int | None = None
    date_of_birth: dt.date | None = None
    gender: GenderIn | None = None
    weight_kg: float | None = None
    calorie_target: float = Field(2000, ge=0, le=MAX_AMOUNT)
    activity_level: ActivityLevelIn = "light"


class NutritionGoalsOut(BaseModel):
    calories_min: float
    calories_max: float
    protein: int
    carbs: int
    fat: int
    fiber: int
    sugar: int
    personalized: bool


# ---------- TDEE ----------


class DayEnergyIn(Payload):
    date: dt.date
    resting_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    active_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    calories_eaten: float = Field(0, ge=0, le=MAX_AMOUNT)


class WeighInIn(Payload):
    date: dt.date
    weight_kg: float = Field(..., gt=0, le=1000)


class TdeeDailyIn(Payload):
    resting_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    active_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    calories_eaten: float = Field(0, ge=0, le=MAX_AMOUNT)
    tef_multiplier: float = Field(1.10, ge=1.0, le=2.0)


class TdeeDailyOut(BaseModel):
    resting_energy: float
    active_energy: float
    raw_tdee: float
    tdee: int
    tef_multiplier: float
    calories_eaten: float
    deficit: float
    projected_weekly_loss_kg: float
    has_health_data: bool
    data_source: Literal["apple_health", "none"]


class TdeeCalibrationIn(Payload):
    days: list[DayEnergyIn]
    weigh_ins: list[WeighInIn] = []
    tef_multiplier: float = Field(1.10, ge=1.0, le=2.0)
    period_days: int = Field(14, ge=1, le=366)
    average_days: int = Field(7, ge=1, le=366)


class DailyTdeeOut(BaseModel):
    date: dt.date
    resting_energy: float
    active_energy: float
    raw_tdee: float
    tdee: int
    calories_eaten: float
    deficit: float


class AverageTdeeOut(BaseModel):
    avg_tdee: int
    days_with_data: int


class ObservedTdeeOut(BaseModel):
    observed_tdee: int
    health_avg_tdee: int
    avg_calories_eaten: int
    weight_change_kg: float
    days_analyzed: int
    suggested_tef_multiplier: float
    calibration_needed: bool
    confidence: Confidence


class TdeeCalibrationOut(BaseModel):
    history: list[DailyTdeeOut]
    average: AverageTdeeOut
    observed: ObservedTdeeOut | None


# ---------- Summary ----------


class DayLogIn(Payload):
    date: dt.date
    entries: list[str | LogEntryIn] = []
    workout_calories: float = Field(0, ge=0, le=MAX_AMOUNT)
    resting_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)
    active_energy: float | None = Field(None, ge=0, le=MAX_AMOUNT)


class DayTotalsIn(Payload):
    log: DayLogIn
    meals: list[MealIn]
    target_calories: float = Field(..., ge=0, le=MAX_AMOUNT)
    inbody_bmr: float | None = Field(None, ge=0, le=MAX_AMOUNT)


class DayTotalsOut(BaseModel):
    date: dt.date
    intake: IntakeOut
    target_calories: float
    resting_energy: float
    active_energy: float
    tdee: float
    has_tdee: bool
    net_calories: float
    true_deficit: float
    deficit: float
    calories_remaining: float
    tdee_source: Literal["inbody", "apple_health"] | None


class WeeklySummaryIn(Payload):
    logs: list[DayLogIn]
    meals: list[MealIn]
    weigh_ins: list[WeighInIn] = []
    target_calories: float = Field(..., ge=0, le=MAX_AMOUNT)
    start_weight_kg: float | None = Field(None, gt=0, le=1000)
    goal_weight_kg: float | None = Field(None, gt=0, le=1000)
    inbody_bmr: float | None = Field(None, ge=0, le=MAX_AMOUNT)


class WeeklySummaryOut(BaseModel):
    week_start: dt.date
    week_end: dt.date
    avg_calories: int
    avg_deficit: int
    week_weight_change: float
    days_logged: int
    latest_weight: float | None
    weight_to_lose: float | None
    weeks_to_goal: int | None
