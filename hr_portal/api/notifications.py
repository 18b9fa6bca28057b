# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query

from hr_portal.api.deps import AuthDep, validate_company_scope
from hr_portal.db import SessionDep
from hr_portal.schemas.notification import MarkAllReadResponse, NotificationListResponse, NotificationResponse
from hr_portal.services import notification as notification_service

notifications_router = APIRouter(
    prefix="/companies/{company_id}/notifications",
    tags=["notifications"],
    dependencies=[Depends(validate_company_scope)],
)


@notifications_router.get("", response_model=NotificationListResponse)
async def list_notifications(
    session: SessionDep,
    auth: AuthDep,
    unread_only: bool = Query(default=False),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=20, ge=1, le=100),
) -> NotificationListResponse:
    """The caller's notifications, newest first."""
    return await notification_service.list_notifications(session, auth, unread_only, offset, limit)


@notifications_router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    session: SessionDep,
    auth: AuthDep,
) -> MarkAllReadResponse:
    """Mark every unread notification of the caller as read."""
    updated = await notification_service.mark_all_read(session, auth)
    return MarkAllReadResponse(updated=updated)


@notifications_router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> NotificationResponse:
    """Mark one notification as read."""
    return await notification_service.mark_read(session, auth, notification_id)
