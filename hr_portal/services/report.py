"""Reporting: audit log queries and the vacation report."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_portal.models.audit import AuditLog
from hr_portal.models.enums import RequestStatus
from hr_portal.models.request import VacationRequest
from hr_portal.schemas.report import (
    AuditLogEntryResponse,
    AuditLogListResponse,
    EmployeeVacationTotals,
    VacationReportResponse,
    VacationReportRow,
)
from hr_portal.services.calendar import DateRange, total_calendar_days
from hr_portal.services.employee import get_employee_service

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession


async def query_audit_log(
    session: AsyncSession,
    company_id: uuid.UUID,
    *,
    entity_type: str | None = None,
    action: str | None = None,
    actor_id: uuid.UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    offset: int = 0,
    limit: int = 50,
) -> AuditLogListResponse:
    """Query audit log entries with optional filters."""
    filters = [col(AuditLog.company_id) == company_id]

    if entity_type is not None:
        filters.append(col(AuditLog.entity_type) == entity_type)
    if action is not None:
        filters.append(col(AuditLog.action) == action)
    if actor_id is not None:
        filters.append(col(AuditLog.actor_id) == actor_id)
    if start_date is not None:
        filters.append(func.date(col(AuditLog.created_at)) >= start_date)
    if end_date is not None:
        filters.append(func.date(col(AuditLog.created_at)) <= end_date)

    count_result = await session.execute(select(func.count()).select_from(AuditLog).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(AuditLog).where(*filters).order_by(col(AuditLog.created_at).desc()).offset(offset).limit(limit)
    )

    return AuditLogListResponse(
        items=[
            AuditLogEntryResponse(
                id=e.id,
                company_id=e.company_id,
                actor_id=e.actor_id,
                entity_type=e.entity_type,
                entity_id=e.entity_id,
                action=e.action,
                before_json=e.before_json,
                after_json=e.after_json,
                created_at=e.created_at,
            )
            for e in result.scalars().all()
        ],
        total=total,
    )


async def vacation_report(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int | None = None,
    status_filter: RequestStatus | None = None,
) -> VacationReportResponse:
    """One row per request plus per-employee totals.

    ``business_days`` is the value stored when the request was submitted;
    ``total_calendar_days`` is the raw span, reported alongside it. A ``year``
    keeps every request with at least one day in that year, so a request
    crossing New Year appears under both years.
    """
    filters = [col(VacationRequest.company_id) == company_id]
    if year is not None:
        filters.append(col(VacationRequest.start_date) <= date(year, 12, 31))
        filters.append(col(VacationRequest.end_date) >= date(year, 1, 1))
    if status_filter is not None:
        filters.append(col(VacationRequest.status) == status_filter.value)

    result = await session.execute(
        select(VacationRequest)
        .where(*filters)
        .order_by(col(VacationRequest.employee_id), col(VacationRequest.start_date))
    )
    requests = list(result.scalars().all())

    directory = get_employee_service()
    names: dict[uuid.UUID, str | None] = {}
    rows: list[VacationReportRow] = []
    totals: dict[uuid.UUID, EmployeeVacationTotals] = {}

    for request in requests:
        if request.employee_id not in names:
            employee = await directory.get_employee(company_id, request.employee_id)
            names[request.employee_id] = employee.full_name if employee else None
        name = names[request.employee_id]

        rows.append(
            VacationReportRow(
                request_id=request.id,
                employee_id=request.employee_id,
                employee_name=name,
                start_date=request.start_date,
                end_date=request.end_date,
                status=request.status,
                business_days=request.business_days,
                total_calendar_days=total_calendar_days(DateRange(request.start_date, request.end_date)),
            )
        )

        summary = totals.setdefault(
            request.employee_id,
            EmployeeVacationTotals(
                employee_id=request.employee_id,
                employee_name=name,
                requests=0,
                business_days=0,
                approved_business_days=0,
            ),
        )
        summary.requests += 1
        summary.business_days += request.business_days
        if request.status == RequestStatus.APPROVED.value:
            summary.approved_business_days += request.business_days

    return VacationReportResponse(
        company_id=company_id,
        year=year,
        rows=rows,
        totals=list(totals.values()),
    )
