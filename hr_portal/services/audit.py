from __future__ import annotations

import enum
import uuid
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from hr_portal.models.audit import AuditLog

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlmodel import SQLModel

    from hr_portal.models.enums import AuditAction, AuditEntityType
    from hr_portal.schemas.auth import AuthContext


def _json_safe(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    return value


def to_audit_dict(model: SQLModel) -> dict[str, Any]:
    """Snapshot a table row as a JSON-safe dict."""
    return {key: _json_safe(value) for key, value in model.model_dump().items()}


def record_change(
    session: AsyncSession,
    auth: AuthContext,
    *,
    entity_type: AuditEntityType,
    entity_id: uuid.UUID,
    action: AuditAction,
    before: SQLModel | None = None,
    after: SQLModel | None = None,
    before_json: dict[str, Any] | None = None,
) -> AuditLog:
    """Add an audit entry to the caller's transaction.

    ``before_json`` takes a snapshot captured earlier, for rows that are
    mutated in place before the entry is written.
    """
    entry = AuditLog(
        company_id=auth.company_id,
        actor_id=auth.user_id,
        entity_type=entity_type.value,
        entity_id=entity_id,
        action=action.value,
        before_json=before_json if before_json is not None else (to_audit_dict(before) if before else None),
        after_json=to_audit_dict(after) if after is not None else None,
    )
    session.add(entry)
    return entry
