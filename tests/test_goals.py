import math
from datetime import date

from macrolog.services.goals import (
    calculate_age,
    calculate_nutrition_goals,
    calculate_progress,
    default_nutrition_goals,
    get_progress_status,
)
from macrolog.services.weight import convert_to_kg, convert_weight, format_weight, format_weight_change


def test_nutrition_goals_male_moderate():
    g = calculate_nutrition_goals(30, "male", 80, 2000, "moderate")
    assert g.fiber == 28
    assert g.sugar == 36
    assert g.protein == 96
    assert g.carbs == 250
    assert g.fat == 67
    assert math.isclose(g.calories_min, 1800)
    assert math.isclose(g.calories_max, 2200)


def test_fiber_fallback_without_calorie_target():
    assert calculate_nutrition_goals(55, "male", 80, 0).fiber == 30
    assert calculate_nutrition_goals(30, "female", 60, 0).fiber == 25
    assert calculate_nutrition_goals(60, "other", 60, 0).fiber == 21


def test_unknown_activity_level_uses_1g_per_kg():
    assert calculate_nutrition_goals(30, "female", 62, 1800, "couch").protein == 62


def test_default_goals():
    g = default_nutrition_goals()
    assert (g.protein, g.carbs, g.fat, g.fiber, g.sugar) == (50, 250, 65, 28, 30)


def test_calculate_age_is_birthday_aware():
    assert calculate_age(date(1990, 6, 15), date(2025, 6, 14)) == 34
    assert calculate_age(date(1990, 6, 15), date(2025, 6, 15)) == 35


def test_progress_and_status():
    assert calculate_progress(50, 0) == 0
    assert calculate_progress(150, 100) == 100
    assert get_progress_status(20, 25, "minimum") == "warning"
    assert get_progress_status(25, 25, "minimum") == "good"
    assert get_progress_status(10, 25, "minimum") == "danger"
    assert get_progress_status(15, 25, "maximum") == "good"
    assert get_progress_status(24, 25, "maximum") == "warning"
    assert get_progress_status(30, 25, "maximum") == "danger"


def test_weight_conversion():
    assert math.isclose(convert_weight(100, "lbs"), 220.462)
    assert convert_weight(100, "kg") == 100
    assert math.isclose(convert_to_kg(220.462, "lbs"), 100, rel_tol=1e-4)


def test_weight_formatting():
    assert format_weight(72.46, "kg") == "72.5 kg"
    assert format_weight_change(1.0, "lbs") == "+2.2 lbs"
    assert format_weight_change(-0.5, "kg") == "-0.5 kg"
