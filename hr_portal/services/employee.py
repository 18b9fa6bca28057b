# ruff: noqa: TC003
from __future__ import annotations

import uuid
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from hr_portal.models.enums import APPROVER_ROLES, Role


class EmployeeInfo(BaseModel):
    """Employee record from the payroll directory."""

    id: uuid.UUID
    company_id: uuid.UUID
    full_name: str
    national_id: str | None = None  # cedula
    position: str | None = None  # cargo
    email: str | None = None
    role: Role = Role.EMPLOYEE


@runtime_checkable
class EmployeeService(Protocol):
    """Interface for the employee directory."""

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        ...

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]:
        """List all employees of a company."""
        ...


class InMemoryEmployeeService:
    """In-memory stub implementation for development."""

    def __init__(self) -> None:
        self._employees: dict[tuple[uuid.UUID, uuid.UUID], EmployeeInfo] = {}

    def seed(self, employee: EmployeeInfo) -> None:
        """Seed an employee for testing."""
        self._employees[(employee.company_id, employee.id)] = employee

    async def get_employee(self, company_id: uuid.UUID, employee_id: uuid.UUID) -> EmployeeInfo | None:
        """Fetch an employee. Returns None if not found."""
        return self._employees.get((company_id, employee_id))

    async def list_employees(self, company_id: uuid.UUID) -> list[EmployeeInfo]:
        """List all employees of a company."""
        return [e for e in self._employees.values() if e.company_id == company_id]


async def list_approvers(service: EmployeeService, company_id: uuid.UUID) -> list[EmployeeInfo]:
    """Supervisors and administrators of a company."""
    employees = await service.list_employees(company_id)
    return [e for e in employees if e.role in APPROVER_ROLES]


_employee_service: EmployeeService = InMemoryEmployeeService()


def get_employee_service() -> EmployeeService:
    """FastAPI dependency for the employee directory."""
    return _employee_service


def set_employee_service(service: EmployeeService) -> None:
    """Override the service (for testing or production wiring)."""
    global _employee_service
    _employee_service = service
