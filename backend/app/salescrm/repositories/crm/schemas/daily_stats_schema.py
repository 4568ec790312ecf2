"""Pydantic schemas for the per-day aggregates."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class DailyStatsValues(BaseModel):
    """Figures computed for a single day."""

    total_leads: int = 0
    total_calls: int = 0
    total_wins: int = 0
    total_revenue: float = 0.0
    show_up_rate: float = 0.0
    conversion_rate: float = 0.0

    model_config = {
        "from_attributes": True,
    }


class DailyStatsResponse(DailyStatsValues):
    id: int
    date: dt.date


class DateRangeFilter(BaseModel):
    """Inclusive calendar-day range used by the reports."""

    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
