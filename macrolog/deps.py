# macrolog/deps.py
from __future__ import annotations

from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import HTTPException, Query

from macrolog.config import settings


# --- "today" dependency -------------------------------------------------------
def _zone() -> tzinfo:
    if settings.TIMEZONE.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(settings.TIMEZONE)
    except ZoneInfoNotFoundError:
        raise RuntimeError(f"Unknown TIMEZONE setting: {settings.TIMEZONE!r}")


def current_date(
    today: Optional[str] = Query(None, description="Override 'today' (YYYY-MM-DD)"),
) -> date:
    """
    The calculation services never read the clock; routes resolve "today" here
    and pass it in. An explicit ?today= wins over the server clock.
    """
    if today:
        try:
            return datetime.strptime(today.strip(), "%Y-%m-%d").date()
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid_date")
    return datetime.now(_zone()).date()
