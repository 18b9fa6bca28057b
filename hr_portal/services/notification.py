"""In-app notifications and e-mail fan-out for vacation requests."""

# ruff: noqa: TC003
from __future__ import annotations

import logging
import re
import uuid
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import BaseModel
from sqlalchemy import func, select, update
from sqlmodel import col

from hr_portal.config import get_settings
from hr_portal.exceptions import AppError
from hr_portal.models.enums import NotificationKind, RequestStatus
from hr_portal.models.notification import Notification
from hr_portal.schemas.notification import NotificationListResponse, NotificationResponse
from hr_portal.services.employee import get_employee_service, list_approvers

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hr_portal.models.request import VacationRequest
    from hr_portal.schemas.auth import AuthContext

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


# ---------------------------------------------------------------------------
# E-mail sender (external collaborator)
# ---------------------------------------------------------------------------


class EmailMessage(BaseModel):
    """An outgoing e-mail."""

    to: list[str]
    subject: str
    body: str


@runtime_checkable
class EmailSender(Protocol):
    """Interface for the mail relay."""

    async def send(self, message: EmailMessage) -> None:
        """Deliver a message or raise."""
        ...


class InMemoryEmailSender:
    """Collects messages instead of sending them."""

    def __init__(self) -> None:
        self.outbox: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        self.outbox.append(message)


_email_sender: EmailSender = InMemoryEmailSender()


def get_email_sender() -> EmailSender:
    return _email_sender


def set_email_sender(sender: EmailSender) -> None:
    """Override the sender (for testing or production wiring)."""
    global _email_sender
    _email_sender = sender


def parse_recipients(raw: str) -> list[str]:
    """Split a comma-separated address list, dropping blanks and malformed entries."""
    recipients = []
    for part in raw.split(","):
        address = part.strip()
        if not address:
            continue
        if _EMAIL_PATTERN.fullmatch(address) is None:
            logger.warning("Ignoring malformed notification address %r", address)
            continue
        recipients.append(address)
    return recipients


async def _send_email(message: EmailMessage) -> bool:
    try:
        await get_email_sender().send(message)
    except Exception:
        logger.exception("Failed to send e-mail %r to %s", message.subject, message.to)
        return False
    return True


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _describe_range(request: VacationRequest) -> str:
    return f"{request.start_date.isoformat()} to {request.end_date.isoformat()} ({request.business_days} days)"


async def _notify_new_request(session: AsyncSession, request: VacationRequest) -> None:
    """In-app notes for approvers, then one e-mail to the configured recipients."""
    directory = get_employee_service()
    employee = await directory.get_employee(request.company_id, request.employee_id)
    name = employee.full_name if employee else str(request.employee_id)
    title = f"New vacation request - {name}"
    message = f"{name} requested vacation from {_describe_range(request)}."

    approvers = await list_approvers(directory, request.company_id)
    for approver in approvers:
        session.add(
            Notification(
                company_id=request.company_id,
                user_id=approver.id,
                kind=NotificationKind.VACATION_REQUESTED.value,
                title=title,
                message=message,
                request_id=request.id,
            )
        )
    await session.commit()

    recipients = parse_recipients(get_settings().notification_recipients)
    if not recipients:
        logger.warning("No valid notification recipients configured; skipping e-mail for request %s", request.id)
        return

    lines = [message]
    if employee is not None:
        if employee.national_id:
            lines.append(f"ID: {employee.national_id}")
        if employee.position:
            lines.append(f"Position: {employee.position}")
    if request.reason:
        lines.append(f"Reason: {request.reason}")
    await _send_email(EmailMessage(to=recipients, subject=title, body="\n".join(lines)))


async def _notify_status_change(session: AsyncSession, request: VacationRequest) -> None:
    """In-app note for the requester, then an e-mail when the directory has an address."""
    approved = request.status == RequestStatus.APPROVED.value
    kind = NotificationKind.VACATION_APPROVED if approved else NotificationKind.VACATION_REJECTED
    verdict = "approved" if approved else "rejected"
    title = f"Vacation request {verdict}"
    message = f"Your vacation request for {_describe_range(request)} was {verdict}."
    if request.resolution_note:
        message += f" Note: {request.resolution_note}"

    session.add(
        Notification(
            company_id=request.company_id,
            user_id=request.employee_id,
            kind=kind.value,
            title=title,
            message=message,
            request_id=request.id,
        )
    )
    await session.commit()

    employee = await get_employee_service().get_employee(request.company_id, request.employee_id)
    if employee is None or not employee.email:
        return
    await _send_email(EmailMessage(to=[employee.email], subject=title, body=message))


async def notify_new_request(session: AsyncSession, request: VacationRequest) -> None:
    """Tell approvers that a vacation request is waiting for them.

    Runs after the request is committed: failures are logged, never raised.
    """
    try:
        await _notify_new_request(session, request)
    except Exception:
        logger.exception("Failed to notify approvers of vacation request %s", request.id)
        await session.rollback()


async def notify_status_change(session: AsyncSession, request: VacationRequest) -> None:
    """Tell the requester that their request was approved or rejected.

    Runs after the resolution is committed: failures are logged, never raised.
    """
    try:
        await _notify_status_change(session, request)
    except Exception:
        logger.exception("Failed to notify employee %s about vacation request %s", request.employee_id, request.id)
        await session.rollback()


# ---------------------------------------------------------------------------
# Inbox
# ---------------------------------------------------------------------------


def _build_notification_response(notification: Notification) -> NotificationResponse:
    return NotificationResponse(
        id=notification.id,
        kind=notification.kind,
        title=notification.title,
        message=notification.message,
        request_id=notification.request_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


async def list_notifications(
    session: AsyncSession,
    auth: AuthContext,
    unread_only: bool = False,
    offset: int = 0,
    limit: int = 20,
) -> NotificationListResponse:
    """The caller's notifications, newest first."""
    filters = [
        col(Notification.company_id) == auth.company_id,
        col(Notification.user_id) == auth.user_id,
    ]
    unread_filters = [*filters, col(Notification.is_read).is_(False)]
    if unread_only:
        filters = unread_filters

    total = (await session.execute(select(func.count()).select_from(Notification).where(*filters))).scalar_one()
    unread = (
        await session.execute(select(func.count()).select_from(Notification).where(*unread_filters))
    ).scalar_one()

    result = await session.execute(
        select(Notification)
        .where(*filters)
        .order_by(col(Notification.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    return NotificationListResponse(
        items=[_build_notification_response(n) for n in result.scalars().all()],
        total=total,
        unread_count=unread,
    )


async def mark_read(
    session: AsyncSession,
    auth: AuthContext,
    notification_id: uuid.UUID,
) -> NotificationResponse:
    """Mark one of the caller's notifications as read."""
    result = await session.execute(
        select(Notification).where(
            col(Notification.id) == notification_id,
            col(Notification.company_id) == auth.company_id,
            col(Notification.user_id) == auth.user_id,
        )
    )
    notification = result.scalar_one_or_none()
    if notification is None:
        raise AppError("Notification not found", status_code=404)

    notification.is_read = True
    await session.commit()
    await session.refresh(notification)
    return _build_notification_response(notification)


async def mark_all_read(session: AsyncSession, auth: AuthContext) -> int:
    """Mark every unread notification of the caller as read. Returns how many changed."""
    result = await session.execute(
        update(Notification)
        .where(
            col(Notification.company_id) == auth.company_id,
            col(Notification.user_id) == auth.user_id,
            col(Notification.is_read).is_(False),
        )
        .values(is_read=True)
    )
    await session.commit()
    return result.rowcount or 0
