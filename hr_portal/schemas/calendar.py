# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class DayCountResponse(BaseModel):
    """Day count for a candidate vacation range.

    ``business_days`` excludes rest days and is what a request stores;
    ``total_calendar_days`` is the raw inclusive span.
    """

    start_date: date
    end_date: date
    business_days: int
    total_calendar_days: int
    included: list[date]
    excluded: list[date]
