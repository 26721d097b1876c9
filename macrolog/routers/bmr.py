# macrolog/routers/bmr.py
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends

from macrolog.deps import current_date
from macrolog.schemas import BMROut, ProfileIn
from macrolog.services.bmr import (
    PhysiologicalProfile,
    can_calculate_bmr,
    get_bmr_source_label,
    get_bmr_with_priority,
)
from macrolog.services.goals import calculate_age
from macrolog.services.weight import convert_to_kg

router = APIRouter()


def _to_profile(payload: ProfileIn, today: date) -> PhysiologicalProfile:
    age = payload.age_years
    if age is None and payload.date_of_birth is not None:
        age = calculate_age(payload.date_of_birth, today)

    def kg(v: float | None) -> float | None:
        return None if v is None else convert_to_kg(v, payload.weight_unit)

    return PhysiologicalProfile(
        inbody_bmr=payload.inbody_bmr,
        lean_body_mass_kg=kg(payload.lean_body_mass_kg),
        weight_kg=kg(payload.weight_kg),
        height_cm=payload.height_cm,
        age_years=age,
        gender=payload.gender,
    )


@router.post("/bmr", response_model=BMROut, summary="Best available BMR for a profile")
def estimate_bmr(payload: ProfileIn, today: date = Depends(current_date)):
    """
    Priority: InBody BMR > Katch–McArdle (lean mass) > Mifflin–St Jeor.
    Also reports which inputs are still missing when nothing applies.
    """
    profile = _to_profile(payload, today)
    result = get_bmr_with_priority(profile)
    readiness = can_calculate_bmr(profile)
    return {
        "bmr": result.bmr,
        "source": result.source,
        "source_label": get_bmr_source_label(result.source),
        "can_calculate": readiness.can_calculate,
        "missing_fields": readiness.missing_fields,
    }
