from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from hr_portal.config import reset_settings
from hr_portal.db import get_session
from hr_portal.main import app
from hr_portal.models import SQLModel
from hr_portal.services.employee import InMemoryEmployeeService, set_employee_service
from hr_portal.services.notification import InMemoryEmailSender, set_email_sender

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from sqlalchemy.ext.asyncio import AsyncEngine

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Pin settings to known values for every test."""
    monkeypatch.setenv("DATABASE_URL", TEST_DATABASE_URL)
    monkeypatch.setenv("REST_WEEKDAYS", "[6]")
    monkeypatch.setenv("NOTIFICATION_RECIPIENTS", "rrhh@example.com")
    reset_settings()
    yield
    reset_settings()


@pytest.fixture(autouse=True)
def email_outbox() -> Iterator[InMemoryEmailSender]:
    """Fresh in-memory mail relay and empty employee directory per test."""
    sender = InMemoryEmailSender()
    set_email_sender(sender)
    set_employee_service(InMemoryEmployeeService())
    yield sender
    set_email_sender(InMemoryEmailSender())
    set_employee_service(InMemoryEmployeeService())


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with every table created.

    StaticPool keeps a single connection so the schema survives across sessions.
    """
    _engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with _engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield _engine
    await _engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Yield a database session bound to the test engine."""
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def async_client(db_session: AsyncSession) -> AsyncIterator[AsyncClient]:
    """Async HTTP client with the database session dependency overridden."""

    async def _override_get_session() -> AsyncIterator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_session] = _override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
