# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel

from hr_portal.models.enums import APPROVER_ROLES, Role


class AuthContext(BaseModel):
    """Principal forwarded by the identity gateway in request headers."""

    company_id: uuid.UUID
    user_id: uuid.UUID
    role: Role = Role.EMPLOYEE

    @property
    def is_approver(self) -> bool:
        return self.role in APPROVER_ROLES

    @property
    def is_administrator(self) -> bool:
        return self.role == Role.ADMINISTRATOR
