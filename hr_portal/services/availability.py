"""Company vacation windows: periods administrators open or block."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.exceptions import AppError
from hr_portal.models.availability import VacationAvailability
from hr_portal.models.enums import AuditAction, AuditEntityType
from hr_portal.schemas.availability import AvailabilityListResponse, AvailabilityResponse
from hr_portal.services.audit import record_change, to_audit_dict
from hr_portal.services.calendar import DateRange, ensure_max_length

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.auth import AuthContext
    from hr_portal.schemas.availability import CreateAvailabilityRequest

logger = logging.getLogger(__name__)


def _build_window_response(window: VacationAvailability) -> AvailabilityResponse:
    return AvailabilityResponse(
        id=window.id,
        company_id=window.company_id,
        start_date=window.start_date,
        end_date=window.end_date,
        available=window.available,
        note=window.note,
        created_at=window.created_at,
    )


async def create_window(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateAvailabilityRequest,
) -> AvailabilityResponse:
    """Open or block a date window for vacations."""
    window_range = ensure_max_length(
        DateRange.parse(payload.start_date, payload.end_date), get_settings().max_request_days
    )

    window = VacationAvailability(
        company_id=auth.company_id,
        start_date=window_range.start,
        end_date=window_range.end,
        available=payload.available,
        note=payload.note,
    )
    session.add(window)
    await session.flush()

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.AVAILABILITY,
        entity_id=window.id,
        action=AuditAction.CREATE,
        after=window,
    )

    await session.commit()
    await session.refresh(window)
    logger.info(
        "Vacation window %s..%s marked %s for company %s",
        window.start_date,
        window.end_date,
        "available" if window.available else "blocked",
        auth.company_id,
    )
    return _build_window_response(window)


async def list_windows(
    session: AsyncSession,
    company_id: uuid.UUID,
    available: bool | None = None,
) -> AvailabilityListResponse:
    """List windows ordered by start date, optionally only open or blocked ones."""
    filters = [col(VacationAvailability.company_id) == company_id]
    if available is not None:
        filters.append(col(VacationAvailability.available) == available)

    count_result = await session.execute(select(func.count()).select_from(VacationAvailability).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(VacationAvailability).where(*filters).order_by(col(VacationAvailability.start_date))
    )
    return AvailabilityListResponse(
        items=[_build_window_response(w) for w in result.scalars().all()],
        total=total,
    )


async def delete_window(
    session: AsyncSession,
    auth: AuthContext,
    window_id: uuid.UUID,
) -> None:
    """Remove a window."""
    result = await session.execute(
        select(VacationAvailability).where(
            col(VacationAvailability.id) == window_id,
            col(VacationAvailability.company_id) == auth.company_id,
        )
    )
    window = result.scalar_one_or_none()
    if window is None:
        raise AppError("Availability window not found", status_code=404)

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.AVAILABILITY,
        entity_id=window.id,
        action=AuditAction.DELETE,
        before_json=to_audit_dict(window),
    )

    await session.delete(window)
    await session.commit()


async def find_blocking_window(
    session: AsyncSession,
    company_id: uuid.UUID,
    date_range: DateRange,
) -> VacationAvailability | None:
    """First blocked window that shares at least one day with the range."""
    result = await session.execute(
        select(VacationAvailability)
        .where(
            col(VacationAvailability.company_id) == company_id,
            col(VacationAvailability.available).is_(False),
            col(VacationAvailability.start_date) <= date_range.end,
            col(VacationAvailability.end_date) >= date_range.start,
        )
        .order_by(col(VacationAvailability.start_date))
        .limit(1)
    )
    return result.scalar_one_or_none()
