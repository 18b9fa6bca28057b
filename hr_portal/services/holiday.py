from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import extract, func, select
from sqlalchemy.exc import IntegrityError
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.exceptions import AppError
from hr_portal.models.enums import AuditAction, AuditEntityType
from hr_portal.models.holiday import CompanyHoliday
from hr_portal.schemas.holiday import HolidayListResponse, HolidayResponse
from hr_portal.services.audit import record_change, to_audit_dict
from hr_portal.services.calendar import parse_calendar_date, weekday_rest_policy, with_holidays

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.schemas.auth import AuthContext
    from hr_portal.schemas.holiday import CreateHolidayRequest
    from hr_portal.services.calendar import DateRange, RestDayPolicy

logger = logging.getLogger(__name__)


def _build_holiday_response(holiday: CompanyHoliday) -> HolidayResponse:
    return HolidayResponse(
        id=holiday.id,
        company_id=holiday.company_id,
        date=holiday.date,
        name=holiday.name,
    )


async def _holiday_exists(session: AsyncSession, company_id: uuid.UUID, day: date) -> bool:
    result = await session.execute(
        select(col(CompanyHoliday.id)).where(
            col(CompanyHoliday.company_id) == company_id,
            col(CompanyHoliday.date) == day,
        )
    )
    return result.first() is not None


async def create_holiday(
    session: AsyncSession,
    auth: AuthContext,
    payload: CreateHolidayRequest,
) -> HolidayResponse:
    """Create a company holiday."""
    day = parse_calendar_date(payload.date)
    if await _holiday_exists(session, auth.company_id, day):
        raise AppError("Holiday already exists for this date", status_code=409)

    holiday = CompanyHoliday(company_id=auth.company_id, date=day, name=payload.name)
    session.add(holiday)

    try:
        await session.flush()
    except IntegrityError:
        await session.rollback()
        raise AppError("Holiday already exists for this date", status_code=409) from None

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.CREATE,
        after=holiday,
    )

    await session.commit()
    await session.refresh(holiday)
    logger.info("Holiday %s (%s) created for company %s", holiday.date, holiday.name, auth.company_id)
    return _build_holiday_response(holiday)


async def list_holidays(
    session: AsyncSession,
    company_id: uuid.UUID,
    year: int | None = None,
    offset: int = 0,
    limit: int = 50,
) -> HolidayListResponse:
    """List company holidays with optional year filter."""
    base_filter = [col(CompanyHoliday.company_id) == company_id]

    if year is not None:
        base_filter.append(extract("year", col(CompanyHoliday.date)) == year)

    count_result = await session.execute(select(func.count()).select_from(CompanyHoliday).where(*base_filter))
    total = count_result.scalar_one()

    result = await session.execute(
        select(CompanyHoliday).where(*base_filter).order_by(col(CompanyHoliday.date)).offset(offset).limit(limit)
    )
    holidays = list(result.scalars().all())

    return HolidayListResponse(
        items=[_build_holiday_response(h) for h in holidays],
        total=total,
    )


async def get_holiday(
    session: AsyncSession,
    company_id: uuid.UUID,
    holiday_id: uuid.UUID,
) -> CompanyHoliday:
    """Get a single holiday or raise 404."""
    result = await session.execute(
        select(CompanyHoliday).where(
            col(CompanyHoliday.id) == holiday_id,
            col(CompanyHoliday.company_id) == company_id,
        )
    )
    holiday = result.scalar_one_or_none()
    if holiday is None:
        raise AppError("Holiday not found", status_code=404)
    return holiday


async def delete_holiday(
    session: AsyncSession,
    auth: AuthContext,
    holiday_id: uuid.UUID,
) -> None:
    """Delete a company holiday."""
    holiday = await get_holiday(session, auth.company_id, holiday_id)

    record_change(
        session,
        auth,
        entity_type=AuditEntityType.HOLIDAY,
        entity_id=holiday.id,
        action=AuditAction.DELETE,
        before_json=to_audit_dict(holiday),
    )

    await session.delete(holiday)
    await session.commit()


async def fetch_holiday_dates(
    session: AsyncSession,
    company_id: uuid.UUID,
    date_range: DateRange,
) -> set[date]:
    """Company holidays falling inside the range."""
    result = await session.execute(
        select(col(CompanyHoliday.date)).where(
            col(CompanyHoliday.company_id) == company_id,
            col(CompanyHoliday.date) >= date_range.start,
            col(CompanyHoliday.date) <= date_range.end,
        )
    )
    return {row[0] for row in result.all()}


async def build_rest_day_policy(
    session: AsyncSession,
    company_id: uuid.UUID,
    date_range: DateRange,
) -> RestDayPolicy:
    """The company's rest-day rule for a range: configured weekdays plus holidays."""
    settings = get_settings()
    holidays = await fetch_holiday_dates(session, company_id, date_range)
    return with_holidays(weekday_rest_policy(settings.rest_weekdays), holidays)
