# macrolog/services/bmr.py
"""
BMR estimation for Macrolog.

Priority (first satisfied wins):
    1. InBody measured BMR           -> source "inbody"
    2. Katch–McArdle from lean mass  -> source "katch_mcardle"
         BMR = 370 + 21.6 * lean_body_mass_kg   (same for every gender)
    3. Mifflin–St Jeor               -> source "mifflin_st_jeor"
         base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
         male +5, female -161, other / prefer-not-to-say -78
    4. nothing usable                -> {bmr: 0, source: "none"}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from macrolog.services.constants import BMR_SOURCE_LABELS, BMRSource, Gender, round_half_up

# Mifflin–St Jeor sex offsets; -78 is the midpoint for other / prefer-not-to-say
_MSJ_OFFSETS = {"male": 5, "female": -161}
_MSJ_NEUTRAL_OFFSET = -78


@dataclass
class PhysiologicalProfile:
    inbody_bmr: Optional[float] = None
    lean_body_mass_kg: Optional[float] = None
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age_years: Optional[float] = None
    gender: Optional[Gender] = None


@dataclass
class BMRResult:
    bmr: float
    source: BMRSource


@dataclass
class BMRReadiness:
    can_calculate: bool
    missing_fields: List[str] = field(default_factory=list)


def _positive(v: Optional[float]) -> bool:
    return v is not None and v > 0


def calculate_bmr_katch_mcardle(lean_body_mass_kg: float) -> int:
    return round_half_up(370 + 21.6 * lean_body_mass_kg)


def calculate_bmr_mifflin_st_jeor(weight_kg: float, height_cm: float, age_years: float, gender: Gender) -> int:
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    return round_half_up(base + _MSJ_OFFSETS.get(gender, _MSJ_NEUTRAL_OFFSET))


def get_bmr_with_priority(profile: PhysiologicalProfile) -> BMRResult:
    """
    Return the best available BMR for ``profile`` and the method that produced it.
    Never raises on missing data; falls through to ``{0, "none"}``.
    """
    p = profile
    if _positive(p.inbody_bmr):
        return BMRResult(bmr=p.inbody_bmr, source="inbody")

    if _positive(p.lean_body_mass_kg):
        return BMRResult(bmr=calculate_bmr_katch_mcardle(p.lean_body_mass_kg), source="katch_mcardle")

    if _positive(p.weight_kg) and _positive(p.height_cm) and _positive(p.age_years) and p.gender:
        return BMRResult(
            bmr=calculate_bmr_mifflin_st_jeor(p.weight_kg, p.height_cm, p.age_years, p.gender),
            source="mifflin_st_jeor",
        )

    return BMRResult(bmr=0, source="none")


def can_calculate_bmr(profile: PhysiologicalProfile) -> BMRReadiness:
    """
    Same cascade as get_bmr_with_priority, but on failure reports which of the
    Mifflin–St Jeor inputs the user still has to enter.
    """
    p = profile
    if _positive(p.inbody_bmr) or _positive(p.lean_body_mass_kg):
        return BMRReadiness(can_calculate=True)

    missing: List[str] = []
    if not _positive(p.weight_kg):
        missing.append("weight")
    if not _positive(p.height_cm):
        missing.append("height")
    if not _positive(p.age_years):
        missing.append("date of birth")
    if not p.gender:
        missing.append("gender")
    return BMRReadiness(can_calculate=not missing, missing_fields=missing)


def get_bmr_source_label(source: BMRSource) -> str:
    return BMR_SOURCE_LABELS.get(source, BMR_SOURCE_LABELS["none"])
