"""Integration tests for holiday CRUD API, authorization, and audit."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlmodel import col

from hr_portal.config import reset_settings
from hr_portal.models.audit import AuditLog
from hr_portal.services.calendar import DateRange
from hr_portal.services.holiday import build_rest_day_policy, fetch_holiday_dates

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

COMPANY_ID = uuid.uuid4()
USER_ID = uuid.uuid4()
ADMIN_HEADERS = {
    "X-Company-Id": str(COMPANY_ID),
    "X-User-Id": str(USER_ID),
    "X-Role": "administrator",
}
EMPLOYEE_HEADERS = {
    "X-Company-Id": str(COMPANY_ID),
    "X-User-Id": str(USER_ID),
    "X-Role": "employee",
}
BASE_URL = f"/companies/{COMPANY_ID}/holidays"


def _holiday_payload(day: str = "2025-10-13", name: str = "Dia de la Raza") -> dict:
    return {"date": day, "name": name}


# ---------------------------------------------------------------------------
# Create holiday tests
# ---------------------------------------------------------------------------


async def test_create_holiday(async_client: AsyncClient) -> None:
    resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)
    assert resp.status_code == 201
    data = resp.json()
    assert data["date"] == "2025-10-13"
    assert data["name"] == "Dia de la Raza"
    assert data["company_id"] == str(COMPANY_ID)
    assert "id" in data


async def test_create_holiday_rejects_malformed_date(async_client: AsyncClient) -> None:
    resp = await async_client.post(BASE_URL, json=_holiday_payload("2025-13-01"), headers=ADMIN_HEADERS)
    assert resp.status_code == 422
    assert resp.json()["error"] == "InvalidDateFormatError"


# ---------------------------------------------------------------------------
# List holiday tests
# ---------------------------------------------------------------------------


async def test_list_holidays_empty(async_client: AsyncClient) -> None:
    resp = await async_client.get(BASE_URL, headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["items"] == []
    assert data["total"] == 0


async def test_list_holidays_year_filter(async_client: AsyncClient) -> None:
    await async_client.post(BASE_URL, json=_holiday_payload("2025-12-25", "Navidad 2025"), headers=ADMIN_HEADERS)
    await async_client.post(BASE_URL, json=_holiday_payload("2026-01-01", "Ano Nuevo 2026"), headers=ADMIN_HEADERS)

    resp_2025 = await async_client.get(f"{BASE_URL}?year=2025", headers=ADMIN_HEADERS)
    data_2025 = resp_2025.json()
    assert data_2025["total"] == 1
    assert data_2025["items"][0]["date"] == "2025-12-25"

    resp_2026 = await async_client.get(f"{BASE_URL}?year=2026", headers=ADMIN_HEADERS)
    data_2026 = resp_2026.json()
    assert data_2026["total"] == 1
    assert data_2026["items"][0]["date"] == "2026-01-01"


async def test_list_holidays_pagination_and_order(async_client: AsyncClient) -> None:
    for day in ("2025-03-01", "2025-01-01", "2025-02-01"):
        await async_client.post(BASE_URL, json=_holiday_payload(day, f"Holiday {day}"), headers=ADMIN_HEADERS)

    resp = await async_client.get(f"{BASE_URL}?offset=0&limit=2", headers=ADMIN_HEADERS)
    data = resp.json()
    assert data["total"] == 3
    assert [h["date"] for h in data["items"]] == ["2025-01-01", "2025-02-01"]

    resp2 = await async_client.get(f"{BASE_URL}?offset=2&limit=2", headers=ADMIN_HEADERS)
    assert [h["date"] for h in resp2.json()["items"]] == ["2025-03-01"]


# ---------------------------------------------------------------------------
# Delete / conflict tests
# ---------------------------------------------------------------------------


async def test_delete_holiday(async_client: AsyncClient) -> None:
    create_resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)
    holiday_id = create_resp.json()["id"]

    del_resp = await async_client.delete(f"{BASE_URL}/{holiday_id}", headers=ADMIN_HEADERS)
    assert del_resp.status_code == 204

    list_resp = await async_client.get(BASE_URL, headers=ADMIN_HEADERS)
    assert list_resp.json()["total"] == 0


async def test_delete_missing_holiday_returns_404(async_client: AsyncClient) -> None:
    resp = await async_client.delete(f"{BASE_URL}/{uuid.uuid4()}", headers=ADMIN_HEADERS)
    assert resp.status_code == 404


async def test_duplicate_date_returns_409(async_client: AsyncClient) -> None:
    payload = _holiday_payload("2025-08-07", "Batalla de Boyaca")
    resp1 = await async_client.post(BASE_URL, json=payload, headers=ADMIN_HEADERS)
    assert resp1.status_code == 201

    resp2 = await async_client.post(BASE_URL, json=payload, headers=ADMIN_HEADERS)
    assert resp2.status_code == 409


# ---------------------------------------------------------------------------
# Authorization tests
# ---------------------------------------------------------------------------


async def test_non_admin_cannot_create(async_client: AsyncClient) -> None:
    resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=EMPLOYEE_HEADERS)
    assert resp.status_code == 403


async def test_supervisor_cannot_create(async_client: AsyncClient) -> None:
    headers = {**EMPLOYEE_HEADERS, "X-Role": "supervisor"}
    resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=headers)
    assert resp.status_code == 403


async def test_non_admin_cannot_delete(async_client: AsyncClient) -> None:
    create_resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)
    holiday_id = create_resp.json()["id"]

    del_resp = await async_client.delete(f"{BASE_URL}/{holiday_id}", headers=EMPLOYEE_HEADERS)
    assert del_resp.status_code == 403


async def test_employee_can_list(async_client: AsyncClient) -> None:
    resp = await async_client.get(BASE_URL, headers=EMPLOYEE_HEADERS)
    assert resp.status_code == 200


async def test_unknown_role_is_forbidden(async_client: AsyncClient) -> None:
    headers = {**EMPLOYEE_HEADERS, "X-Role": "superuser"}
    resp = await async_client.get(BASE_URL, headers=headers)
    assert resp.status_code == 403


async def test_company_mismatch_is_forbidden(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"/companies/{uuid.uuid4()}/holidays", headers=ADMIN_HEADERS)
    assert resp.status_code == 403


async def test_company_isolation(async_client: AsyncClient) -> None:
    await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)

    other_company = uuid.uuid4()
    other_headers = {**ADMIN_HEADERS, "X-Company-Id": str(other_company)}
    resp = await async_client.get(f"/companies/{other_company}/holidays", headers=other_headers)
    assert resp.status_code == 200
    assert resp.json()["total"] == 0


# ---------------------------------------------------------------------------
# Rest-day policy
# ---------------------------------------------------------------------------


async def test_fetch_holiday_dates_limited_to_range(async_client: AsyncClient, db_session: AsyncSession) -> None:
    for day in ("2025-10-13", "2025-11-03", "2025-12-08"):
        await async_client.post(BASE_URL, json=_holiday_payload(day, day), headers=ADMIN_HEADERS)

    dates = await fetch_holiday_dates(db_session, COMPANY_ID, DateRange.parse("2025-10-01", "2025-11-30"))
    assert dates == {date(2025, 10, 13), date(2025, 11, 3)}


async def test_rest_day_policy_combines_sundays_and_holidays(
    async_client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    await async_client.post(BASE_URL, json=_holiday_payload("2025-10-13"), headers=ADMIN_HEADERS)

    policy = await build_rest_day_policy(db_session, COMPANY_ID, DateRange.parse("2025-10-13", "2025-10-19"))
    assert policy(date(2025, 10, 13))
    assert policy(date(2025, 10, 19))
    assert not policy(date(2025, 10, 14))
    assert not policy(date(2025, 10, 18))


async def test_rest_weekdays_setting_changes_policy(
    db_session: AsyncSession,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("REST_WEEKDAYS", "[5, 6]")
    reset_settings()

    policy = await build_rest_day_policy(db_session, COMPANY_ID, DateRange.parse("2025-10-13", "2025-10-19"))
    assert policy(date(2025, 10, 18))
    assert policy(date(2025, 10, 19))
    assert not policy(date(2025, 10, 17))


# ---------------------------------------------------------------------------
# Audit tests
# ---------------------------------------------------------------------------


async def test_create_holiday_writes_audit(
    async_client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)
    holiday_id = resp.json()["id"]

    result = await db_session.execute(
        select(AuditLog).where(
            col(AuditLog.entity_type) == "HOLIDAY",
            col(AuditLog.action) == "CREATE",
            col(AuditLog.company_id) == COMPANY_ID,
        )
    )
    audit = result.scalar_one()
    assert audit.actor_id == USER_ID
    assert str(audit.entity_id) == holiday_id
    assert audit.before_json is None
    assert audit.after_json is not None
    assert audit.after_json["name"] == "Dia de la Raza"
    assert audit.after_json["date"] == "2025-10-13"


async def test_delete_holiday_writes_audit(
    async_client: AsyncClient,
    db_session: AsyncSession,
) -> None:
    create_resp = await async_client.post(BASE_URL, json=_holiday_payload(), headers=ADMIN_HEADERS)
    holiday_id = create_resp.json()["id"]
    await async_client.delete(f"{BASE_URL}/{holiday_id}", headers=ADMIN_HEADERS)

    result = await db_session.execute(
        select(AuditLog).where(
            col(AuditLog.entity_type) == "HOLIDAY",
            col(AuditLog.action) == "DELETE",
        )
    )
    audit = result.scalar_one()
    assert str(audit.entity_id) == holiday_id
    assert audit.before_json is not None
    assert audit.before_json["name"] == "Dia de la Raza"
    assert audit.after_json is None
