from __future__ import annotations

import enum


class Role(enum.StrEnum):
    """Portal role of the authenticated principal."""

    EMPLOYEE = "employee"
    SUPERVISOR = "supervisor"
    ADMINISTRATOR = "administrator"


APPROVER_ROLES = frozenset({Role.SUPERVISOR, Role.ADMINISTRATOR})


class RequestStatus(enum.StrEnum):
    """Lifecycle of a vacation request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class NotificationKind(enum.StrEnum):
    """Kind of in-app notification."""

    VACATION_REQUESTED = "VACATION_REQUESTED"
    VACATION_APPROVED = "VACATION_APPROVED"
    VACATION_REJECTED = "VACATION_REJECTED"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    VACATION_REQUEST = "VACATION_REQUEST"
    AVAILABILITY = "AVAILABILITY"
    HOLIDAY = "HOLIDAY"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    DELETE = "DELETE"
    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
