# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from hr_portal.api.deps import AdminDep, AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.schemas.availability import (
    AvailabilityListResponse,
    AvailabilityResponse,
    CreateAvailabilityRequest,
)
from hr_portal.services import availability as availability_service

availability_router = APIRouter(
    prefix="/companies/{company_id}/vacations/availability",
    tags=["availability"],
    dependencies=[Depends(validate_company_scope)],
)


@availability_router.post("", response_model=AvailabilityResponse, status_code=status.HTTP_201_CREATED)
async def create_window(
    payload: CreateAvailabilityRequest,
    session: SessionDep,
    auth: AdminDep,
) -> AvailabilityResponse:
    """Open or block a vacation window (administrator only)."""
    return await availability_service.create_window(session, auth, payload)


@availability_router.get("", response_model=AvailabilityListResponse)
async def list_windows(
    session: SessionDep,
    auth: AuthDep,
    available: bool | None = Query(default=None),
) -> AvailabilityListResponse:
    """List vacation windows ordered by start date."""
    return await availability_service.list_windows(session, auth.company_id, available)


@availability_router.delete("/{window_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_window(
    window_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
) -> None:
    """Delete a vacation window (administrator only)."""
    await availability_service.delete_window(session, auth, window_id)
