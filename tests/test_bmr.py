from macrolog.services.bmr import (
    PhysiologicalProfile,
    calculate_bmr_katch_mcardle,
    calculate_bmr_mifflin_st_jeor,
    can_calculate_bmr,
    get_bmr_source_label,
    get_bmr_with_priority,
)


def test_katch_mcardle_reference_values():
    assert calculate_bmr_katch_mcardle(60) == 1666
    assert calculate_bmr_katch_mcardle(80) == 2098
    assert calculate_bmr_katch_mcardle(55.5) == 1569  # 370 + 1198.8


def test_mifflin_male_and_female():
    assert calculate_bmr_mifflin_st_jeor(80, 180, 30, "male") == 1780
    assert calculate_bmr_mifflin_st_jeor(60, 165, 25, "female") == 1345


def test_mifflin_non_binary_uses_midpoint_offset():
    # base 1775 - 78
    assert calculate_bmr_mifflin_st_jeor(80, 180, 30, "other") == 1697
    assert calculate_bmr_mifflin_st_jeor(80, 180, 30, "prefer-not-to-say") == 1697


def test_inbody_wins_even_with_absurd_fields():
    prof = PhysiologicalProfile(
        inbody_bmr=1650, lean_body_mass_kg=-5, weight_kg=999, height_cm=0, age_years=-1, gender="female"
    )
    res = get_bmr_with_priority(prof)
    assert res.bmr == 1650
    assert res.source == "inbody"


def test_lean_mass_before_mifflin():
    prof = PhysiologicalProfile(lean_body_mass_kg=60, weight_kg=80, height_cm=180, age_years=30, gender="male")
    res = get_bmr_with_priority(prof)
    assert (res.bmr, res.source) == (1666, "katch_mcardle")


def test_falls_back_to_mifflin():
    prof = PhysiologicalProfile(weight_kg=80, height_cm=180, age_years=30, gender="male")
    res = get_bmr_with_priority(prof)
    assert (res.bmr, res.source) == (1780, "mifflin_st_jeor")


def test_zero_inbody_and_zero_lean_mass_are_ignored():
    prof = PhysiologicalProfile(inbody_bmr=0, lean_body_mass_kg=0, weight_kg=60, height_cm=165, age_years=25, gender="female")
    assert get_bmr_with_priority(prof).source == "mifflin_st_jeor"


def test_insufficient_data_returns_none():
    res = get_bmr_with_priority(PhysiologicalProfile(weight_kg=80, height_cm=180))
    assert res.bmr == 0
    assert res.source == "none"


def test_can_calculate_reports_missing_fields_in_order():
    r = can_calculate_bmr(PhysiologicalProfile(height_cm=170))
    assert not r.can_calculate
    assert r.missing_fields == ["weight", "date of birth", "gender"]


def test_can_calculate_with_lean_mass_only():
    r = can_calculate_bmr(PhysiologicalProfile(lean_body_mass_kg=50))
    assert r.can_calculate
    assert r.missing_fields == []


def test_can_calculate_with_full_mifflin_inputs():
    r = can_calculate_bmr(PhysiologicalProfile(weight_kg=70, height_cm=170, age_years=40, gender="other"))
    assert r.can_calculate


def test_source_labels():
    assert get_bmr_source_label("inbody") == "Measured by InBody"
    assert get_bmr_source_label("none") == "Not available"


def test_deterministic():
    prof = PhysiologicalProfile(weight_kg=72.3, height_cm=176.5, age_years=41, gender="female")
    assert get_bmr_with_priority(prof) == get_bmr_with_priority(prof)
