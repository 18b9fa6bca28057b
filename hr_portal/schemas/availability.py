# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field


class CreateAvailabilityRequest(BaseModel):
    """Request body for opening or blocking a vacation window."""

    start_date: str = Field(description="First day of the window, YYYY-MM-DD")
    end_date: str = Field(description="Last day of the window, YYYY-MM-DD")
    available: bool
    note: str | None = Field(default=None, max_length=500)


class AvailabilityResponse(BaseModel):
    """Response schema for a vacation availability window."""

    id: uuid.UUID
    company_id: uuid.UUID
    start_date: date
    end_date: date
    available: bool
    note: str | None
    created_at: datetime


class AvailabilityListResponse(BaseModel):
    """List of availability windows ordered by start date."""

    items: list[AvailabilityResponse]
    total: int
