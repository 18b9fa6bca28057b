# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel


class AuditLogEntryResponse(BaseModel):
    """Response schema for a single audit log entry."""

    id: uuid.UUID
    company_id: uuid.UUID
    actor_id: uuid.UUID
    entity_type: str
    entity_id: uuid.UUID
    action: str
    before_json: dict[str, Any] | None
    after_json: dict[str, Any] | None
    created_at: datetime


class AuditLogListResponse(BaseModel):
    """Paginated list of audit log entries."""

    items: list[AuditLogEntryResponse]
    total: int


class VacationReportRow(BaseModel):
    """One vacation request in the report."""

    request_id: uuid.UUID
    employee_id: uuid.UUID
    employee_name: str | None
    start_date: date
    end_date: date
    status: str
    business_days: int
    total_calendar_days: int


class EmployeeVacationTotals(BaseModel):
    """Per-employee totals across the report rows."""

    employee_id: uuid.UUID
    employee_name: str | None
    requests: int
    business_days: int
    approved_business_days: int


class VacationReportResponse(BaseModel):
    """Vacation report for a company."""

    company_id: uuid.UUID
    year: int | None
    rows: list[VacationReportRow]
    totals: list[EmployeeVacationTotals]
