# ruff: noqa: B008, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import Depends, Header, Path, status

from hr_portal.exceptions import AppError
from hr_portal.models.enums import Role
from hr_portal.schemas.auth import AuthContext


async def get_auth_context(
    x_company_id: uuid.UUID = Header(),
    x_user_id: uuid.UUID = Header(),
    x_role: str = Header(default=Role.EMPLOYEE.value),
) -> AuthContext:
    """Build the principal from the headers set by the identity gateway."""
    try:
        role = Role(x_role.strip().lower())
    except ValueError:
        raise AppError(f"Unknown role {x_role!r}", status_code=status.HTTP_403_FORBIDDEN) from None
    return AuthContext(company_id=x_company_id, user_id=x_user_id, role=role)


AuthDep = Annotated[AuthContext, Depends(get_auth_context)]


async def require_approver(
    auth: AuthDep,
) -> AuthContext:
    """Require the supervisor or administrator role."""
    if not auth.is_approver:
        raise AppError("Supervisor or administrator role required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


ApproverDep = Annotated[AuthContext, Depends(require_approver)]


async def require_administrator(
    auth: AuthDep,
) -> AuthContext:
    """Require the administrator role."""
    if not auth.is_administrator:
        raise AppError("Administrator role required", status_code=status.HTTP_403_FORBIDDEN)
    return auth


AdminDep = Annotated[AuthContext, Depends(require_administrator)]


async def validate_company_scope(
    company_id: uuid.UUID = Path(),
    auth: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    """Ensure the path company_id matches the auth header company_id."""
    if company_id != auth.company_id:
        raise AppError("Company ID mismatch", status_code=status.HTTP_403_FORBIDDEN)
    return auth
