# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    """Response schema for an in-app notification."""

    id: uuid.UUID
    kind: str
    title: str
    message: str
    request_id: uuid.UUID | None
    is_read: bool
    created_at: datetime


class NotificationListResponse(BaseModel):
    """A page of the caller's notifications plus the unread total."""

    items: list[NotificationResponse]
    total: int
    unread_count: int


class MarkAllReadResponse(BaseModel):
    """How many notifications were marked as read."""

    updated: int
