# macrolog/services/intake.py
"""
Turn a day's log entries into calorie/macro totals.

Log entries come in two shapes:
    "meal-id"                                   -> 1 serving (legacy)
    {"meal_id": ..., "quantity": 150, "unit": "g"}

Units:
    serving -> multiplier = quantity
    g, ml   -> quantity / serving_size          (ml assumes 1 g/ml)
    oz      -> quantity * 28.35 / serving_size
    other   -> multiplier = quantity            (legacy bare quantity)
serving_size defaults to 100 g when the meal has none.

Each macro is rounded per entry, then summed. An entry whose scaled value is
not finite contributes zero for that macro.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Union

from macrolog.services.constants import DEFAULT_SERVING_SIZE_G, GRAMS_PER_UNIT, round_half_up

log = logging.getLogger("macrolog.intake")

MACRO_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar")


@dataclass
class Meal:
    id: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: Optional[float] = None
    sugar: Optional[float] = None
    serving_size: Optional[float] = None  # grams one serving's macros refer to


@dataclass
class LogEntry:
    meal_id: str
    quantity: float = 1
    unit: str = "serving"


@dataclass
class IntakeTotals:
    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    fiber: int = 0
    sugar: int = 0
    unresolved_meal_ids: List[str] = field(default_factory=list)


def get_serving_multiplier(quantity: float, unit: str, serving_size: Optional[float] = None) -> float:
    if unit == "serving":
        return quantity

    grams_per_unit = GRAMS_PER_UNIT.get(unit)
    if grams_per_unit is None:
        return quantity

    size = serving_size or DEFAULT_SERVING_SIZE_G
    return quantity * grams_per_unit / size


def normalize_log_entry(entry: Union[str, LogEntry, Mapping[str, Any]]) -> LogEntry:
    """
    Single place where the legacy bare-id form and dict payloads become a LogEntry.
    Accepts both ``meal_id`` and ``mealId`` keys in mappings.
    """
    if isinstance(entry, LogEntry):
        return entry
    if isinstance(entry, str):
        return LogEntry(meal_id=entry)

    meal_id = entry.get("meal_id", entry.get("mealId"))
    quantity = entry.get("quantity")
    return LogEntry(
        meal_id=str(meal_id) if meal_id is not None else "",
        quantity=1 if quantity is None else quantity,
        unit=entry.get("unit") or "serving",
    )


def meal_catalog_from(meals: Iterable[Meal]) -> dict[str, Meal]:
    return {m.id: m for m in meals}


def aggregate_intake(
    entries: Iterable[Union[str, LogEntry, Mapping[str, Any]]],
    meal_catalog: Mapping[str, Meal],
) -> IntakeTotals:
    totals = IntakeTotals()
    for raw in entries:
        entry = normalize_log_entry(raw)
        meal = meal_catalog.get(entry.meal_id)
        if meal is None:
            log.debug("meal %r not in catalog; contributing zero", entry.meal_id)
            totals.unresolved_meal_ids.append(entry.meal_id)
            continue

        multiplier = get_serving_multiplier(entry.quantity, entry.unit, meal.serving_size)
        for name in MACRO_FIELDS:
            amount = (getattr(meal, name) or 0) * multiplier
            if not math.isfinite(amount):
                log.warning("non-finite %s for meal %r (quantity=%r); contributing zero", name, entry.meal_id, entry.quantity)
                continue
            setattr(totals, name, getattr(totals, name) + round_half_up(amount))
    return totals
