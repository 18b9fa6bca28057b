from sqlmodel import SQLModel

from hr_portal.models.audit import AuditLog
from hr_portal.models.availability import VacationAvailability
from hr_portal.models.base import TimestampMixin, UUIDBase
from hr_portal.models.enums import (
    AuditAction,
    AuditEntityType,
    NotificationKind,
    RequestStatus,
    Role,
)
from hr_portal.models.holiday import CompanyHoliday
from hr_portal.models.notification import Notification
from hr_portal.models.request import VacationRequest

__all__ = [
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "CompanyHoliday",
    "Notification",
    "NotificationKind",
    "RequestStatus",
    "Role",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
    "VacationAvailability",
    "VacationRequest",
]
