# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from hr_portal.models.base import TimestampMixin, UUIDBase


class VacationAvailability(UUIDBase, TimestampMixin, table=True):
    """A company date window where vacations are allowed or blocked."""

    __tablename__ = "vacation_availability"
    __table_args__ = (sa.Index("ix_availability_company_start", "company_id", "start_date"),)

    company_id: uuid.UUID = Field(index=True)
    start_date: date
    end_date: date
    available: bool = True
    note: str | None = Field(default=None, max_length=500)
