"""Tests for recipient parsing and the in-app notification inbox."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest

from hr_portal.models.notification import Notification
from hr_portal.services.notification import parse_recipients

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

COMPANY_ID = uuid.uuid4()
USER_ID = uuid.uuid4()
OTHER_USER_ID = uuid.uuid4()
HEADERS = {
    "X-Company-Id": str(COMPANY_ID),
    "X-User-Id": str(USER_ID),
    "X-Role": "supervisor",
}
BASE_URL = f"/companies/{COMPANY_ID}/notifications"


async def _add_notifications(
    session: AsyncSession,
    user_id: uuid.UUID,
    count: int,
    *,
    is_read: bool = False,
) -> list[Notification]:
    notifications = [
        Notification(
            company_id=COMPANY_ID,
            user_id=user_id,
            kind="VACATION_REQUESTED",
            title=f"New vacation request - {i}",
            message="Ana Gomez requested vacation from 2025-10-13 to 2025-10-29 (15 days).",
            is_read=is_read,
        )
        for i in range(count)
    ]
    session.add_all(notifications)
    await session.commit()
    return notifications


# ---------------------------------------------------------------------------
# parse_recipients
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("", []),
        ("rrhh@example.com", ["rrhh@example.com"]),
        (" rrhh@example.com , jefe@example.com ", ["rrhh@example.com", "jefe@example.com"]),
        ("rrhh@example.com,,", ["rrhh@example.com"]),
        ("not-an-address, rrhh@example.com", ["rrhh@example.com"]),
        ("a@b, c d@example.com", []),
    ],
)
def test_parse_recipients(raw: str, expected: list[str]) -> None:
    assert parse_recipients(raw) == expected


# ---------------------------------------------------------------------------
# Inbox
# ---------------------------------------------------------------------------


async def test_list_notifications_empty(async_client: AsyncClient) -> None:
    resp = await async_client.get(BASE_URL, headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"items": [], "total": 0, "unread_count": 0}


async def test_list_only_own_notifications(async_client: AsyncClient, db_session: AsyncSession) -> None:
    await _add_notifications(db_session, USER_ID, 2)
    await _add_notifications(db_session, OTHER_USER_ID, 3)

    data = (await async_client.get(BASE_URL, headers=HEADERS)).json()
    assert data["total"] == 2
    assert data["unread_count"] == 2


async def test_unread_only_filter(async_client: AsyncClient, db_session: AsyncSession) -> None:
    await _add_notifications(db_session, USER_ID, 2)
    await _add_notifications(db_session, USER_ID, 1, is_read=True)

    everything = (await async_client.get(BASE_URL, headers=HEADERS)).json()
    assert everything["total"] == 3
    assert everything["unread_count"] == 2

    unread = (await async_client.get(f"{BASE_URL}?unread_only=true", headers=HEADERS)).json()
    assert unread["total"] == 2
    assert all(not n["is_read"] for n in unread["items"])


async def test_mark_read(async_client: AsyncClient, db_session: AsyncSession) -> None:
    (notification,) = await _add_notifications(db_session, USER_ID, 1)

    resp = await async_client.post(f"{BASE_URL}/{notification.id}/read", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()["is_read"] is True

    data = (await async_client.get(BASE_URL, headers=HEADERS)).json()
    assert data["unread_count"] == 0


async def test_mark_read_of_other_user_returns_404(async_client: AsyncClient, db_session: AsyncSession) -> None:
    (notification,) = await _add_notifications(db_session, OTHER_USER_ID, 1)

    resp = await async_client.post(f"{BASE_URL}/{notification.id}/read", headers=HEADERS)
    assert resp.status_code == 404


async def test_mark_all_read(async_client: AsyncClient, db_session: AsyncSession) -> None:
    await _add_notifications(db_session, USER_ID, 3)
    await _add_notifications(db_session, OTHER_USER_ID, 1)

    resp = await async_client.post(f"{BASE_URL}/read-all", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json() == {"updated": 3}

    data = (await async_client.get(BASE_URL, headers=HEADERS)).json()
    assert data["unread_count"] == 0

    other_headers = {**HEADERS, "X-User-Id": str(OTHER_USER_ID)}
    other = (await async_client.get(BASE_URL, headers=other_headers)).json()
    assert other["unread_count"] == 1


async def test_pagination(async_client: AsyncClient, db_session: AsyncSession) -> None:
    await _add_notifications(db_session, USER_ID, 5)

    data = (await async_client.get(f"{BASE_URL}?offset=0&limit=2", headers=HEADERS)).json()
    assert data["total"] == 5
    assert len(data["items"]) == 2
