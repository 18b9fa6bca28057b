# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from hr_portal.models.base import TimestampMixin, UUIDBase


class Notification(UUIDBase, TimestampMixin, table=True):
    """In-app notification shown in a user's inbox."""

    __tablename__ = "notification"
    __table_args__ = (sa.Index("ix_notification_user_read", "user_id", "is_read"),)

    company_id: uuid.UUID = Field(index=True)
    user_id: uuid.UUID = Field(index=True)
    kind: str = Field(max_length=50)
    title: str = Field(max_length=255)
    message: str
    request_id: uuid.UUID | None = None
    is_read: bool = Field(default=False, sa_column_kwargs={"server_default": sa.false()})
