# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import BaseModel, Field

from hr_portal.models.enums import RequestStatus

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitVacationPayload(BaseModel):
    """Request body for submitting a vacation request.

    Dates travel as ``YYYY-MM-DD`` strings and are parsed by the calendar
    service, never by a generic datetime parser.
    """

    start_date: str
    end_date: str
    reason: str | None = Field(default=None, max_length=1000)
    employee_id: uuid.UUID | None = Field(
        default=None,
        description="Employee the request is for; defaults to the caller. Approvers only.",
    )


class ResolutionPayload(BaseModel):
    """Request body for approve/reject actions."""

    note: str | None = Field(default=None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class VacationRequestResponse(BaseModel):
    """Response schema for a single vacation request."""

    id: uuid.UUID
    company_id: uuid.UUID
    employee_id: uuid.UUID
    start_date: date
    end_date: date
    business_days: int
    reason: str | None
    status: RequestStatus
    requested_at: datetime
    resolved_at: datetime | None
    resolved_by: uuid.UUID | None
    resolution_note: str | None


class VacationRequestListResponse(BaseModel):
    """Paginated list of vacation requests."""

    items: list[VacationRequestResponse]
    total: int
