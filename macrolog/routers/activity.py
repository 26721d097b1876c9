# macrolog/routers/activity.py
from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter

from macrolog.config import settings
from macrolog.schemas import ActivityIn, ActivityOut
from macrolog.services.activity import (
    HealthSample,
    analyze_activity_level,
    get_recommendation_reason,
)

router = APIRouter()


@router.post("/analysis", response_model=ActivityOut, summary="Recommend an activity level from recent samples")
def activity_analysis(payload: ActivityIn):
    samples = [
        HealthSample(date=s.date, steps=s.steps, exercise_minutes=s.exercise_minutes)
        for s in payload.samples
    ]
    window = payload.window_days or settings.ACTIVITY_WINDOW_DAYS
    analysis = analyze_activity_level(samples, payload.current_level, window)
    return {**asdict(analysis), "reason": get_recommendation_reason(analysis)}
