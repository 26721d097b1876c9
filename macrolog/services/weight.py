# macrolog/services/weight.py
from __future__ import annotations

KG_TO_LBS = 2.20462
LBS_TO_KG = 0.453592


def convert_weight(weight_kg: float, unit: str) -> float:
    """Convert a stored kg value for display in ``unit`` ("kg" or "lbs")."""
    if unit == "lbs":
        return weight_kg * KG_TO_LBS
    return weight_kg


def convert_to_kg(weight: float, from_unit: str) -> float:
    if from_unit == "lbs":
        return weight * LBS_TO_KG
    return weight


def format_weight(weight_kg: float, unit: str, decimals: int = 1) -> str:
    return f"{convert_weight(weight_kg, unit):.{decimals}f} {unit}"


def format_weight_change(change_kg: float, unit: str, decimals: int = 1) -> str:
    converted = convert_weight(change_kg, unit)
    sign = "+" if converted > 0 else ""
    return f"{sign}{converted:.{decimals}f} {unit}"
