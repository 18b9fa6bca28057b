# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from hr_portal.models.base import UUIDBase, now_utc
from hr_portal.models.enums import RequestStatus


class VacationRequest(UUIDBase, table=True):
    """An employee's vacation request and its approval state."""

    __tablename__ = "vacation_request"
    __table_args__ = (
        sa.Index("ix_vacation_request_company_status", "company_id", "status"),
        sa.Index("ix_vacation_request_employee_dates", "employee_id", "start_date", "end_date"),
    )

    company_id: uuid.UUID = Field(index=True)
    employee_id: uuid.UUID = Field(index=True)
    start_date: date
    end_date: date
    business_days: int
    reason: str | None = Field(default=None, max_length=1000)
    status: str = Field(
        default=RequestStatus.PENDING, max_length=20, index=True, sa_column_kwargs={"server_default": "PENDING"}
    )
    requested_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
    resolved_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    resolved_by: uuid.UUID | None = None
    resolution_note: str | None = Field(default=None, max_length=1000)
