# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from hr_portal.api.deps import ApproverDep, AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.models.enums import RequestStatus
from hr_portal.schemas.calendar import DayCountResponse
from hr_portal.schemas.vacation import (
    ResolutionPayload,
    SubmitVacationPayload,
    VacationRequestListResponse,
    VacationRequestResponse,
)
from hr_portal.services import vacation as vacation_service

vacations_router = APIRouter(
    prefix="/companies/{company_id}/vacations",
    tags=["vacations"],
    dependencies=[Depends(validate_company_scope)],
)


@vacations_router.get("/days", response_model=DayCountResponse)
async def preview_days(
    session: SessionDep,
    auth: AuthDep,
    start: str = Query(description="First vacation day, YYYY-MM-DD"),
    end: str = Query(description="Last vacation day, YYYY-MM-DD"),
) -> DayCountResponse:
    """Count the vacation days a range would use."""
    return await vacation_service.preview_days(session, auth.company_id, start, end)


@vacations_router.post("/requests", response_model=VacationRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_request(
    payload: SubmitVacationPayload,
    session: SessionDep,
    auth: AuthDep,
) -> VacationRequestResponse:
    """Submit a vacation request."""
    return await vacation_service.submit_request(session, auth, payload)


@vacations_router.get("/requests", response_model=VacationRequestListResponse)
async def list_requests(
    session: SessionDep,
    auth: AuthDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> VacationRequestListResponse:
    """List vacation requests with optional filters."""
    return await vacation_service.list_requests(session, auth, status_filter, employee_id, offset, limit)


@vacations_router.get("/requests/{request_id}", response_model=VacationRequestResponse)
async def get_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> VacationRequestResponse:
    """Get a single vacation request."""
    return await vacation_service.get_request(session, auth, request_id)


@vacations_router.post("/requests/{request_id}/approve", response_model=VacationRequestResponse)
async def approve_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: ApproverDep,
    payload: ResolutionPayload | None = None,
) -> VacationRequestResponse:
    """Approve a pending request (supervisor or administrator)."""
    return await vacation_service.approve_request(session, auth, request_id, payload)


@vacations_router.post("/requests/{request_id}/reject", response_model=VacationRequestResponse)
async def reject_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: ApproverDep,
    payload: ResolutionPayload | None = None,
) -> VacationRequestResponse:
    """Reject a pending request (supervisor or administrator)."""
    return await vacation_service.reject_request(session, auth, request_id, payload)
