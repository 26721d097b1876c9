# macrolog/routers/intake.py
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Query

from macrolog.schemas import MAX_AMOUNT, IntakeIn, IntakeOut, LogEntryIn, MealIn, MultiplierOut
from macrolog.services.intake import (
    LogEntry,
    Meal,
    aggregate_intake,
    get_serving_multiplier,
    meal_catalog_from,
)

router = APIRouter()


def to_catalog(meals: list[MealIn]) -> dict[str, Meal]:
    return meal_catalog_from(Meal(**m.model_dump()) for m in meals)


def to_log_entries(entries: list[str | LogEntryIn]) -> list[str | LogEntry]:
    return [
        LogEntry(meal_id=e.meal_id, quantity=e.quantity, unit=e.unit) if isinstance(e, LogEntryIn) else e
        for e in entries
    ]


@router.get("/multiplier", response_model=MultiplierOut, summary="Serving multiplier for a logged quantity")
def serving_multiplier(
    quantity: float = Query(..., ge=0, le=MAX_AMOUNT, allow_inf_nan=False),
    unit: str = Query("serving", description="serving|g|oz|ml"),
    serving_size: float | None = Query(None, gt=0, le=MAX_AMOUNT, allow_inf_nan=False, description="Reference grams per serving"),
):
    return {
        "quantity": quantity,
        "unit": unit,
        "serving_size": serving_size,
        "multiplier": get_serving_multiplier(quantity, unit, serving_size),
    }


@router.post("/totals", response_model=IntakeOut, summary="Calorie/macro totals for a day's log")
def intake_totals(payload: IntakeIn):
    """
    Entries are either bare meal ids (one serving) or {meal_id, quantity, unit}.
    Ids missing from `meals` contribute zero and are listed in unresolved_meal_ids.
    """
    return asdict(aggregate_intake(to_log_entries(payload.entries), to_catalog(payload.meals)))
