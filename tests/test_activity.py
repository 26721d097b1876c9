import random
from datetime import date, timedelta

import pytest

from macrolog.services.activity import (
    HealthSample,
    analyze_activity_level,
    classify_activity,
    get_recommendation_reason,
)

START = date(2025, 3, 1)


def samples(n, steps=None, minutes=None):
    return [HealthSample(date=START + timedelta(days=i), steps=steps, exercise_minutes=minutes) for i in range(n)]


def test_fewer_than_three_samples_never_recommends():
    res = analyze_activity_level(samples(2, steps=20000, minutes=90), "sedentary")
    assert not res.should_recommend
    assert res.confidence == "low"
    assert res.recommended_level == "sedentary"
    assert res.days_analyzed == 2


def test_no_current_level_defaults_to_light_without_data():
    res = analyze_activity_level([], None)
    assert res.recommended_level == "light"
    assert res.current_level is None


def test_samples_without_data_do_not_count():
    data = samples(2, steps=8000) + [HealthSample(date=date(2025, 2, 1))]
    res = analyze_activity_level(data, "light")
    assert res.days_analyzed == 2
    assert res.confidence == "low"


def test_high_confidence_very_active_on_steps():
    res = analyze_activity_level(samples(12, steps=12500), "moderate")
    assert res.recommended_level == "very_active"
    assert res.confidence == "high"
    assert res.should_recommend
    assert res.avg_steps == 12500


def test_exercise_days_alone_can_lift_level():
    # 5 days, all with 30 min -> 7 days/week
    res = analyze_activity_level(samples(5, steps=2000, minutes=30), "sedentary")
    assert res.days_with_exercise == 5
    assert res.recommended_level == "very_active"
    assert res.confidence == "medium"


def test_window_keeps_most_recent_days():
    old = [HealthSample(date=START - timedelta(days=30 + i), steps=20000) for i in range(10)]
    recent = samples(14, steps=3000)
    res = analyze_activity_level(old + recent, "light")
    assert res.days_analyzed == 14
    assert res.avg_steps == 3000
    assert res.recommended_level == "sedentary"


def test_same_level_is_not_recommended():
    res = analyze_activity_level(samples(10, steps=8000), "moderate")
    assert res.recommended_level == "moderate"
    assert not res.should_recommend


def test_low_confidence_blocks_recommendation():
    res = analyze_activity_level(samples(4, steps=11000), "sedentary")
    assert res.recommended_level == "active"
    assert res.confidence == "low"
    assert not res.should_recommend


def test_averages_treat_missing_fields_as_zero_inside_window():
    data = samples(3, steps=9000) + [HealthSample(date=START + timedelta(days=10), exercise_minutes=40)]
    res = analyze_activity_level(data, None)
    assert res.days_analyzed == 4
    assert res.avg_steps == 6750
    assert res.avg_exercise_minutes == 10
    assert res.days_with_exercise == 1


@pytest.mark.parametrize(
    "steps, days, expected",
    [
        (12500, 0, "very_active"),
        (0, 6, "very_active"),
        (10000, 0, "active"),
        (0, 5, "active"),
        (7500, 0, "moderate"),
        (0, 3, "moderate"),
        (5000, 0, "light"),
        (0, 1, "light"),
        (4999, 0, "sedentary"),
    ],
)
def test_classification_thresholds(steps, days, expected):
    assert classify_activity(steps, days) == expected


def test_reason_mentions_steps():
    res = analyze_activity_level(samples(12, steps=12500), "moderate")
    assert "12,500" in get_recommendation_reason(res)
    assert "very active" in get_recommendation_reason(res)


def test_analysis_does_not_depend_on_input_order():
    history = [
        HealthSample(date=START + timedelta(days=i), steps=4000 + 600 * i, exercise_minutes=(i * 7) % 45)
        for i in range(20)
    ]
    expected = analyze_activity_level(history, "light")
    for seed in range(5):
        shuffled = list(history)
        random.Random(seed).shuffle(shuffled)
        assert analyze_activity_level(shuffled, "light") == expected
