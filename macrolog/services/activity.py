# macrolog/services/activity.py
"""
Recommend an activity level from recent step / exercise history.

Window: most recent `window_days` samples that carry steps or exercise minutes
(default 14). Fewer than 3 such samples -> no recommendation.

Classification, first match wins (avg steps OR extrapolated exercise days/week):
    >= 12500 steps or >= 6 days -> very_active
    >= 10000 steps or >= 5 days -> active
    >=  7500 steps or >= 3 days -> moderate
    >=  5000 steps or >= 1 day  -> light
    otherwise                   -> sedentary

An "exercise day" is one with at least 20 exercise minutes.
Confidence: >= 10 samples high, >= 5 medium, else low.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from macrolog.services.constants import ActivityLevel, Confidence, round_half_up

MIN_SAMPLES = 3
EXERCISE_DAY_MINUTES = 20

# (min avg steps, min exercise days per week, level), highest first
_LEVEL_RULES = (
    (12500, 6, "very_active"),
    (10000, 5, "active"),
    (7500, 3, "moderate"),
    (5000, 1, "light"),
)


@dataclass
class HealthSample:
    date: date
    steps: Optional[int] = None
    exercise_minutes: Optional[int] = None

    def has_activity(self) -> bool:
        return bool(self.steps) or bool(self.exercise_minutes)


@dataclass
class ActivityAnalysis:
    recommended_level: ActivityLevel
    current_level: Optional[ActivityLevel]
    should_recommend: bool
    avg_steps: int
    avg_exercise_minutes: int
    days_with_exercise: int
    days_analyzed: int
    confidence: Confidence


def classify_activity(avg_steps: float, weekly_exercise_days: int) -> ActivityLevel:
    for min_steps, min_days, level in _LEVEL_RULES:
        if avg_steps >= min_steps or weekly_exercise_days >= min_days:
            return level
    return "sedentary"


def _confidence_for(sample_count: int) -> Confidence:
    if sample_count >= 10:
        return "high"
    if sample_count >= 5:
        return "medium"
    return "low"


def analyze_activity_level(
    samples: Iterable[HealthSample],
    current_level: Optional[ActivityLevel] = None,
    window_days: int = 14,
) -> ActivityAnalysis:
    window: List[HealthSample] = sorted(
        (s for s in samples if s.has_activity()),
        key=lambda s: s.date,
        reverse=True,
    )[: max(window_days, 0)]
    n = len(window)

    if n < MIN_SAMPLES:
        return ActivityAnalysis(
            recommended_level=current_level or "light",
            current_level=current_level,
            should_recommend=False,
            avg_steps=0,
            avg_exercise_minutes=0,
            days_with_exercise=0,
            days_analyzed=n,
            confidence="low",
        )

    avg_steps = round_half_up(sum(s.steps or 0 for s in window) / n)
    avg_minutes = round_half_up(sum(s.exercise_minutes or 0 for s in window) / n)
    days_with_exercise = sum(1 for s in window if (s.exercise_minutes or 0) >= EXERCISE_DAY_MINUTES)
    weekly_exercise_days = round_half_up(days_with_exercise / n * 7)

    recommended = classify_activity(avg_steps, weekly_exercise_days)
    confidence = _confidence_for(n)

    return ActivityAnalysis(
        recommended_level=recommended,
        current_level=current_level,
        should_recommend=recommended != current_level and confidence != "low",
        avg_steps=avg_steps,
        avg_exercise_minutes=avg_minutes,
        days_with_exercise=days_with_exercise,
        days_analyzed=n,
        confidence=confidence,
    )


def get_recommendation_reason(analysis: ActivityAnalysis) -> str:
    steps = f"{analysis.avg_steps:,}"
    exercise = f"{analysis.days_with_exercise} exercise days"
    level = analysis.recommended_level

    if level == "very_active":
        return (
            f"Your {steps} daily steps and {exercise} over the last "
            f"{analysis.days_analyzed} days indicate a very active lifestyle."
        )
    if level == "active":
        return f"With {steps} daily steps and {exercise}, you're maintaining an active lifestyle."
    if level == "moderate":
        return f"Your activity data ({steps} steps, {exercise}) suggests moderate activity."
    if level == "light":
        return f"Based on {steps} daily steps and {exercise}, light activity is a good fit."
    return (
        f"Your current activity level ({steps} steps) suggests a sedentary lifestyle. "
        "Consider adding more movement!"
    )
