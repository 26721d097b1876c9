from datetime import date, timedelta

import pytest

from macrolog.services.tdee import (
    DayEnergy,
    WeighIn,
    calculate_apple_health_tdee,
    calculate_average_tdee,
    calculate_observed_tdee,
    calculate_rolling_weight_average,
    get_daily_tdee_history,
)

TODAY = date(2025, 3, 10)


def day(offset, resting=1600, active=400, eaten=2050):
    return DayEnergy(date=TODAY - timedelta(days=offset), resting_energy=resting, active_energy=active, calories_eaten=eaten)


# Rolling averages: 80.2 around 2025-02-24, 79.2 around today
WEIGH_INS = [
    WeighIn(date(2025, 2, 20), 80.0),
    WeighIn(date(2025, 2, 23), 80.4),
    WeighIn(date(2025, 3, 5), 79.0),
    WeighIn(date(2025, 3, 9), 79.4),
]


# ---------- daily ----------

def test_daily_tdee_applies_tef_and_projects_loss():
    res = calculate_apple_health_tdee(1700, 500, calories_eaten=1900)
    assert res.raw_tdee == 2200
    assert res.tdee == 2420
    assert res.deficit == 520
    assert res.projected_weekly_loss_kg == 0.47
    assert res.has_health_data is True
    assert res.data_source == "apple_health"


def test_daily_tdee_without_resting_energy():
    res = calculate_apple_health_tdee(None, 300)
    assert res.has_health_data is False
    assert res.data_source == "none"
    assert res.tdee == 330


def test_daily_tdee_custom_multiplier():
    assert calculate_apple_health_tdee(2000, 0, tef_multiplier=1.0).tdee == 2000


# ---------- rolling weight ----------

def test_rolling_average_needs_two_readings():
    assert calculate_rolling_weight_average(WEIGH_INS[:1], date(2025, 2, 24)) is None


def test_rolling_average_window_is_inclusive():
    assert calculate_rolling_weight_average(WEIGH_INS, date(2025, 2, 24)) == pytest.approx(80.2)
    assert calculate_rolling_weight_average(WEIGH_INS, TODAY) == pytest.approx(79.2)
    # 2025-02-20 is exactly seven days before
    assert calculate_rolling_weight_average(WEIGH_INS, date(2025, 2, 27)) == pytest.approx(80.2)


# ---------- history / average ----------

def test_history_is_sorted_and_skips_days_without_resting():
    days = [day(1), day(3), day(2, resting=None), day(20)]
    history = get_daily_tdee_history(days, today=TODAY)
    assert [h.date for h in history] == [TODAY - timedelta(days=3), TODAY - timedelta(days=1)]
    assert history[0].tdee == 2200
    assert history[0].deficit == 150


def test_average_tdee_over_window():
    days = [day(0, active=400), day(1, active=600), day(9, active=2000)]
    avg = calculate_average_tdee(days, today=TODAY)
    # 2200 and 2420; the 9-day-old entry is outside the 7-day window
    assert avg.avg_tdee == 2310
    assert avg.days_with_data == 2


def test_average_tdee_without_data():
    avg = calculate_average_tdee([day(0, resting=0)], today=TODAY)
    assert (avg.avg_tdee, avg.days_with_data) == (0, 0)


# ---------- observed ----------

def test_observed_tdee_from_weight_change():
    days = [day(i) for i in range(14)]
    res = calculate_observed_tdee(days, WEIGH_INS, today=TODAY)
    assert res is not None
    assert res.avg_calories_eaten == 2050
    assert res.health_avg_tdee == 2200
    assert res.weight_change_kg == pytest.approx(1.0)
    # 2050 + 7700 * 1.0 / 14
    assert res.observed_tdee == 2600
    assert res.days_analyzed == 14
    assert res.confidence == "high"
    assert res.calibration_needed is True
    # 2600 / 2000 = 1.3, clamped
    assert res.suggested_tef_multiplier == 1.25


def test_observed_tdee_within_tolerance():
    days = [day(i, eaten=1590) for i in range(10)]
    res = calculate_observed_tdee(days, WEIGH_INS, today=TODAY)
    # 1590 + 7700 * 1.0 / 10
    assert res.observed_tdee == 2360
    assert res.confidence == "medium"
    assert res.calibration_needed is False
    assert res.suggested_tef_multiplier == pytest.approx(1.18)


def test_observed_tdee_needs_seven_days():
    days = [day(i) for i in range(6)]
    assert calculate_observed_tdee(days, WEIGH_INS, today=TODAY) is None


def test_observed_tdee_needs_weights_at_both_ends():
    days = [day(i) for i in range(14)]
    assert calculate_observed_tdee(days, WEIGH_INS[2:], today=TODAY) is None


def test_observed_tdee_is_deterministic():
    days = [day(i) for i in range(14)]
    first = calculate_observed_tdee(days, WEIGH_INS, today=TODAY)
    assert calculate_observed_tdee(days, WEIGH_INS, today=TODAY) == first
