"""Tests for the employee directory and mail relay stubs."""

from __future__ import annotations

import uuid

from hr_portal.models.enums import Role
from hr_portal.services.employee import (
    EmployeeInfo,
    EmployeeService,
    InMemoryEmployeeService,
    get_employee_service,
    list_approvers,
    set_employee_service,
)
from hr_portal.services.notification import (
    EmailMessage,
    EmailSender,
    InMemoryEmailSender,
    get_email_sender,
    set_email_sender,
)

COMPANY_A = uuid.uuid4()
COMPANY_B = uuid.uuid4()


def _make_employee(company_id: uuid.UUID, name: str = "Juana", role: Role = Role.EMPLOYEE) -> EmployeeInfo:
    return EmployeeInfo(
        id=uuid.uuid4(),
        company_id=company_id,
        full_name=f"{name} Perez",
        national_id="1020304050",
        position="Analista",
        email=f"{name.lower()}@example.com",
        role=role,
    )


# ---------------------------------------------------------------------------
# InMemoryEmployeeService tests
# ---------------------------------------------------------------------------


async def test_employee_service_get_not_found() -> None:
    svc = InMemoryEmployeeService()
    result = await svc.get_employee(COMPANY_A, uuid.uuid4())
    assert result is None


async def test_employee_service_seed_and_get() -> None:
    svc = InMemoryEmployeeService()
    emp = _make_employee(COMPANY_A)
    svc.seed(emp)
    result = await svc.get_employee(COMPANY_A, emp.id)
    assert result is not None
    assert result.id == emp.id
    assert result.company_id == COMPANY_A
    assert result.national_id == "1020304050"


async def test_employee_service_get_wrong_company() -> None:
    svc = InMemoryEmployeeService()
    emp = _make_employee(COMPANY_A)
    svc.seed(emp)
    assert await svc.get_employee(COMPANY_B, emp.id) is None


async def test_employee_service_list_filters_by_company() -> None:
    svc = InMemoryEmployeeService()
    emp_a = _make_employee(COMPANY_A, "Alicia")
    emp_b = _make_employee(COMPANY_B, "Bernardo")
    svc.seed(emp_a)
    svc.seed(emp_b)

    result_a = await svc.list_employees(COMPANY_A)
    assert [e.id for e in result_a] == [emp_a.id]

    result_b = await svc.list_employees(COMPANY_B)
    assert [e.id for e in result_b] == [emp_b.id]


async def test_list_approvers_returns_supervisors_and_administrators() -> None:
    svc = InMemoryEmployeeService()
    worker = _make_employee(COMPANY_A, "Carlos")
    supervisor = _make_employee(COMPANY_A, "Diana", Role.SUPERVISOR)
    admin = _make_employee(COMPANY_A, "Elena", Role.ADMINISTRATOR)
    other_admin = _make_employee(COMPANY_B, "Fabio", Role.ADMINISTRATOR)
    for emp in (worker, supervisor, admin, other_admin):
        svc.seed(emp)

    approvers = await list_approvers(svc, COMPANY_A)
    assert {a.id for a in approvers} == {supervisor.id, admin.id}


def test_in_memory_employee_service_satisfies_protocol() -> None:
    assert isinstance(InMemoryEmployeeService(), EmployeeService)


def test_set_employee_service_swaps_instance() -> None:
    svc = InMemoryEmployeeService()
    set_employee_service(svc)
    assert get_employee_service() is svc


# ---------------------------------------------------------------------------
# InMemoryEmailSender tests
# ---------------------------------------------------------------------------


async def test_email_sender_collects_messages() -> None:
    sender = InMemoryEmailSender()
    message = EmailMessage(to=["rrhh@example.com"], subject="Hola", body="Cuerpo")
    await sender.send(message)
    assert sender.outbox == [message]


def test_in_memory_email_sender_satisfies_protocol() -> None:
    assert isinstance(InMemoryEmailSender(), EmailSender)


def test_set_email_sender_swaps_instance() -> None:
    sender = InMemoryEmailSender()
    set_email_sender(sender)
    assert get_email_sender() is sender
