# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from hr_portal.api.deps import AdminDep, ApproverDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.models.enums import RequestStatus
from hr_portal.schemas.report import AuditLogListResponse, VacationReportResponse
from hr_portal.services import report as report_service

reports_router = APIRouter(
    prefix="/companies/{company_id}",
    tags=["reports"],
    dependencies=[Depends(validate_company_scope)],
)


@reports_router.get("/audit-log", response_model=AuditLogListResponse)
async def query_audit_log(
    session: SessionDep,
    auth: AdminDep,
    entity_type: str | None = Query(default=None),
    action: str | None = Query(default=None),
    actor_id: uuid.UUID | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AuditLogListResponse:
    """Query audit log entries with optional filters (administrator only)."""
    return await report_service.query_audit_log(
        session,
        auth.company_id,
        entity_type=entity_type,
        action=action,
        actor_id=actor_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@reports_router.get("/reports/vacations", response_model=VacationReportResponse)
async def vacation_report(
    session: SessionDep,
    auth: ApproverDep,
    year: int | None = Query(default=None, ge=1, le=9999, description="Requests with at least one day in this year"),
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
) -> VacationReportResponse:
    """Vacation requests with business-day and calendar-day totals (approvers only)."""
    return await report_service.vacation_report(session, auth.company_id, year, status_filter)
