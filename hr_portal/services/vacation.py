# ruff: noqa: TC003
from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.exceptions import AppError
from hr_portal.models.enums import AuditAction, AuditEntityType, RequestStatus
from hr_portal.models.request import VacationRequest
from hr_portal.schemas.calendar import DayCountResponse
from hr_portal.schemas.vacation import VacationRequestListResponse, VacationRequestResponse
from hr_portal.services.audit import record_change, to_audit_dict
from hr_portal.services.availability import find_blocking_window
from hr_portal.services.calendar import (
    BusinessDayCount,
    DateRange,
    count_business_days,
    ensure_max_length,
    total_calendar_days,
)
from hr_portal.services.holiday import build_rest_day_policy
from hr_portal.services.notification import notify_new_request, notify_status_change

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.auth import AuthContext
    from hr_portal.schemas.vacation import ResolutionPayload, SubmitVacationPayload

logger = logging.getLogger(__name__)

_ACTIVE_STATUSES = (RequestStatus.PENDING.value, RequestStatus.APPROVED.value)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_request_response(request: VacationRequest) -> VacationRequestResponse:
    """Map a request row to its response schema."""
    return VacationRequestResponse(
        id=request.id,
        company_id=request.company_id,
        employee_id=request.employee_id,
        start_date=request.start_date,
        end_date=request.end_date,
        business_days=request.business_days,
        reason=request.reason,
        status=RequestStatus(request.status),
        requested_at=request.requested_at,
        resolved_at=request.resolved_at,
        resolved_by=request.resolved_by,
        resolution_note=request.resolution_note,
    )


async def _get_request_or_404(
    session: AsyncSession,
    company_id: uuid.UUID,
    request_id: uuid.UUID,
) -> VacationRequest:
    result = await session.execute(
        select(VacationRequest).where(
            col(VacationRequest.id) == request_id,
            col(VacationRequest.company_id) == company_id,
        )
    )
    request = result.scalar_one_or_none()
    if request is None:
        raise AppError("Vacation request not found", status_code=404)
    return request


async def _check_overlap(
    session: AsyncSession,
    company_id: uuid.UUID,
    employee_id: uuid.UUID,
    date_range: DateRange,
) -> None:
    """Raise 409 if a pending or approved request shares a day with the range."""
    result = await session.execute(
        select(col(VacationRequest.id))
        .where(
            col(VacationRequest.company_id) == company_id,
            col(VacationRequest.employee_id) == employee_id,
            col(VacationRequest.status).in_(_ACTIVE_STATUSES),
            col(VacationRequest.start_date) <= date_range.end,
            col(VacationRequest.end_date) >= date_range.start,
        )
        .limit(1)
    )
    if result.first() is not None:
        raise AppError("Request overlaps with an existing pending or approved request", status_code=409)


async def count_company_business_days(
    session: AsyncSession,
    company_id: uuid.UUID,
    date_range: DateRange,
) -> BusinessDayCount:
    """Count a range under the company's rest-day rule.

    Every place that needs a vacation day count goes through here.
    """
    policy = await build_rest_day_policy(session, company_id, date_range)
    return count_business_days(date_range, policy)


async def _resolve(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    new_status: RequestStatus,
    audit_action: AuditAction,
    payload: ResolutionPayload | None,
) -> VacationRequestResponse:
    """Shared logic for approve and reject."""
    if not auth.is_approver:
        raise AppError("Supervisor or administrator role required", status_code=403)

    vacation_request = await _get_request_or_404(session, auth.company_id, request_id)
    if vacation_request.status != RequestStatus.PENDING.value:
        raise AppError(f"Only pending requests can be {new_status.value.lower()}", status_code=400)

    before = to_audit_dict(vacation_request)

    vacation_request.status = new_status.value
    vacation_request.resolved_at = datetime.now(UTC)
    vacation_request.resolved_by = auth.user_id
    vacation_request.resolution_note = payload.note if payload else None

    await session.flush()

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.VACATION_REQUEST,
        entity_id=vacation_request.id,
        action=audit_action,
        before_json=before,
        after=vacation_request,
    )

    await session.commit()
    await session.refresh(vacation_request)
    logger.info("Vacation request %s %s by %s", vacation_request.id, new_status.value, auth.user_id)

    response = _build_request_response(vacation_request)
    await notify_status_change(session, vacation_request)
    return response


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def preview_days(
    session: AsyncSession,
    company_id: uuid.UUID,
    start: str,
    end: str,
) -> DayCountResponse:
    """Day count for a candidate range, as shown while filling in the form."""
    date_range = ensure_max_length(DateRange.parse(start, end), get_settings().max_request_days)
    result = await count_company_business_days(session, company_id, date_range)
    return DayCountResponse(
        start_date=date_range.start,
        end_date=date_range.end,
        business_days=result.count,
        total_calendar_days=total_calendar_days(date_range),
        included=list(result.included),
        excluded=list(result.excluded),
    )


async def submit_request(
    session: AsyncSession,
    auth: AuthContext,
    payload: SubmitVacationPayload,
) -> VacationRequestResponse:
    """Submit a vacation request as PENDING.

    Flow:
    1. Resolve the employee (self, or anyone when the caller is an approver)
    2. Parse and validate the range (format, order, length)
    3. Reject ranges touching a blocked availability window
    4. Reject overlap with the employee's pending/approved requests
    5. Count business days under the company rule; reject an empty count
    6. Persist, audit, commit
    7. Notify approvers
    """
    employee_id = payload.employee_id or auth.user_id
    if employee_id != auth.user_id and not auth.is_approver:
        raise AppError("Employees can only request vacations for themselves", status_code=403)

    date_range = ensure_max_length(
        DateRange.parse(payload.start_date, payload.end_date), get_settings().max_request_days
    )

    blocking = await find_blocking_window(session, auth.company_id, date_range)
    if blocking is not None:
        raise AppError(
            f"Vacations are not available between {blocking.start_date} and {blocking.end_date}",
            status_code=409,
        )

    await _check_overlap(session, auth.company_id, employee_id, date_range)

    result = await count_company_business_days(session, auth.company_id, date_range)
    if result.count == 0:
        raise AppError("Requested range contains only rest days", status_code=400)

    vacation_request = VacationRequest(
        company_id=auth.company_id,
        employee_id=employee_id,
        start_date=date_range.start,
        end_date=date_range.end,
        business_days=result.count,
        reason=payload.reason,
        status=RequestStatus.PENDING.value,
        requested_at=datetime.now(UTC),
    )
    session.add(vacation_request)
    await session.flush()

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.VACATION_REQUEST,
        entity_id=vacation_request.id,
        action=AuditAction.SUBMIT,
        after=vacation_request,
    )

    await session.commit()
    await session.refresh(vacation_request)
    logger.info(
        "Vacation request %s submitted for employee %s: %s..%s, %d business days",
        vacation_request.id,
        employee_id,
        date_range.start,
        date_range.end,
        result.count,
    )

    response = _build_request_response(vacation_request)
    await notify_new_request(session, vacation_request)
    return response


async def approve_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: ResolutionPayload | None = None,
) -> VacationRequestResponse:
    """Approve a pending request."""
    return await _resolve(session, auth, request_id, RequestStatus.APPROVED, AuditAction.APPROVE, payload)


async def reject_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    payload: ResolutionPayload | None = None,
) -> VacationRequestResponse:
    """Reject a pending request."""
    return await _resolve(session, auth, request_id, RequestStatus.REJECTED, AuditAction.REJECT, payload)


async def get_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
) -> VacationRequestResponse:
    """Get a single request. Employees only see their own."""
    vacation_request = await _get_request_or_404(session, auth.company_id, request_id)
    if vacation_request.employee_id != auth.user_id and not auth.is_approver:
        raise AppError("Vacation request not found", status_code=404)
    return _build_request_response(vacation_request)


async def list_requests(
    session: AsyncSession,
    auth: AuthContext,
    status_filter: RequestStatus | None = None,
    employee_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 50,
) -> VacationRequestListResponse:
    """List requests, newest first. Employees are limited to their own."""
    if not auth.is_approver:
        employee_id = auth.user_id

    base_filters = [col(VacationRequest.company_id) == auth.company_id]
    if status_filter is not None:
        base_filters.append(col(VacationRequest.status) == status_filter.value)
    if employee_id is not None:
        base_filters.append(col(VacationRequest.employee_id) == employee_id)

    count_result = await session.execute(select(func.count()).select_from(VacationRequest).where(*base_filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(VacationRequest)
        .where(*base_filters)
        .order_by(col(VacationRequest.requested_at).desc())
        .offset(offset)
        .limit(limit)
    )
    return VacationRequestListResponse(
        items=[_build_request_response(r) for r in result.scalars().all()],
        total=total,
    )
