"""
Notifications Router - /me/notifications endpoints.

Provides notification listing, read status, and reminder settings.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from teamtodo.core.constants import DEFAULT_NOTIFICATION_LIMIT, MAX_NOTIFICATION_LIMIT
from teamtodo.core.deps import get_current_session, get_db, require_csrf_header
from teamtodo.db.models import Notification
from teamtodo.schemas.auth import UserSession
from teamtodo.services import notification_service, user_service


router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class NotificationRead(BaseModel):
    """Notification response."""
    id: str
    type: str
    message: str
    todo_id: str | None
    url: str | None
    is_read: bool
    created_at: str


class NotificationListResponse(BaseModel):
    """Notification list with unread badge count."""
    items: list[NotificationRead]
    unread_count: int


class UnreadCountResponse(BaseModel):
    """Unread count only (for polling)."""
    count: int


class MarkAllReadResponse(BaseModel):
    marked_read: int


class ReminderSettingsRead(BaseModel):
    """User reminder email preference."""
    email_reminders_enabled: bool


class ReminderSettingsUpdate(BaseModel):
    email_reminders_enabled: bool


def _to_read(n: Notification) -> NotificationRead:
    return NotificationRead(
        id=str(n.id),
        type=n.type,
        message=n.message,
        todo_id=str(n.todo_id) if n.todo_id else None,
        url=notification_service.get_navigation_url(n.todo_id),
        is_read=n.is_read,
        created_at=n.created_at.isoformat(),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/notifications", response_model=NotificationListResponse)
def list_notifications(
    limit: int = Query(DEFAULT_NOTIFICATION_LIMIT, ge=1, le=MAX_NOTIFICATION_LIMIT),
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get user's notifications, newest first."""
    notifications = notification_service.get_notifications(
        db=db,
        user_id=session.user_id,
        limit=limit,
    )
    unread_count = notification_service.get_unread_count(db=db, user_id=session.user_id)

    return NotificationListResponse(
        items=[_to_read(n) for n in notifications],
        unread_count=unread_count,
    )


@router.get("/notifications/count", response_model=UnreadCountResponse)
def get_unread_count(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get unread notification count (for polling)."""
    count = notification_service.get_unread_count(db=db, user_id=session.user_id)
    return UnreadCountResponse(count=count)


@router.patch(
    "/notifications/{notification_id}/read",
    response_model=NotificationRead,
    dependencies=[Depends(require_csrf_header)],
)
def mark_notification_read(
    notification_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Mark a notification as read."""
    notification = notification_service.mark_read(
        db=db,
        notification_id=notification_id,
        user_id=session.user_id,
    )

    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    return _to_read(notification)


@router.post(
    "/notifications/read-all",
    response_model=MarkAllReadResponse,
    dependencies=[Depends(require_csrf_header)],
)
def mark_all_read(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Mark all notifications as read."""
    count = notification_service.mark_all_read(db=db, user_id=session.user_id)
    return MarkAllReadResponse(marked_read=count)


@router.get("/settings/reminders", response_model=ReminderSettingsRead)
def get_reminder_settings(
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get user's reminder email preference."""
    enabled = user_service.get_email_reminders_enabled(db, session.user_id)
    if enabled is None:
        raise HTTPException(status_code=404, detail="User not found")
    return ReminderSettingsRead(email_reminders_enabled=enabled)


@router.patch(
    "/settings/reminders",
    response_model=ReminderSettingsRead,
    dependencies=[Depends(require_csrf_header)],
)
def update_reminder_settings(
    data: ReminderSettingsUpdate,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Turn reminder emails on or off."""
    enabled = user_service.update_email_reminders_enabled(
        db, session.user_id, data.email_reminders_enabled
    )
    if enabled is None:
        raise HTTPException(status_code=404, detail="User not found")
    return ReminderSettingsRead(email_reminders_enabled=enabled)
