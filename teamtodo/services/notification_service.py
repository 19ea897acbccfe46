"""
Notification Service - handles in-app notifications.

Provides CRUD for notifications and trigger functions for todo events.
Notifications are scoped by recipient user id; the todo reference is
nulled (not cascaded) when the todo is deleted.
"""

from uuid import UUID

from sqlalchemy.orm import Session

from teamtodo.core.constants import DEFAULT_NOTIFICATION_LIMIT
from teamtodo.db.enums import NotificationType
from teamtodo.db.models import Notification, Todo, User


# =============================================================================
# Notification CRUD
# =============================================================================


def create_notification(
    db: Session,
    *,
    user_id: UUID,
    type: NotificationType,
    message: str,
    todo_id: UUID | None = None,
) -> Notification:
    """
    Create a notification.

    Pure append: callers apply the actor != recipient rule.
    """
    notification = Notification(
        user_id=user_id,
        type=type.value,
        message=message,
        todo_id=todo_id,
        is_read=False,
    )
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def get_notifications(
    db: Session,
    user_id: UUID,
    limit: int = DEFAULT_NOTIFICATION_LIMIT,
) -> list[Notification]:
    """Get the user's notifications, newest first."""
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def get_unread_count(db: Session, user_id: UUID) -> int:
    """Get count of unread notifications."""
    return (
        db.query(Notification)
        .filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
        .count()
    )


def mark_read(
    db: Session,
    notification_id: UUID,
    user_id: UUID,
) -> Notification | None:
    """
    Mark a notification as read.

    Returns None when the notification does not exist or belongs to someone
    else; the two cases are indistinguishable to the caller.
    """
    notification = (
        db.query(Notification)
        .filter(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
        .first()
    )

    if notification and not notification.is_read:
        notification.is_read = True
        db.commit()
        db.refresh(notification)

    return notification


def mark_all_read(db: Session, user_id: UUID) -> int:
    """Mark all notifications as read. Returns count updated."""
    count = (
        db.query(Notification)
        .filter(
            Notification.user_id == user_id,
            Notification.is_read.is_(False),
        )
        .update({"is_read": True}, synchronize_session=False)
    )
    db.commit()
    return count


def get_navigation_url(todo_id: UUID | None) -> str | None:
    """Where a notification leads; None once its todo has been deleted."""
    if todo_id is None:
        return None
    return f"/todos?highlight={todo_id}"


# =============================================================================
# Notification Triggers (called from todo event handlers)
# =============================================================================


def notify_todo_assigned(
    db: Session,
    todo: Todo,
    *,
    actor: User,
    assignee_id: UUID | None,
) -> Notification | None:
    """Notify user when a todo is assigned to them (never for self-assignment)."""
    if not assignee_id or assignee_id == actor.id:
        return None

    return create_notification(
        db,
        user_id=assignee_id,
        type=NotificationType.TODO_ASSIGNED,
        message=f'{actor.email} assigned you to "{todo.title}"',
        todo_id=todo.id,
    )


def notify_todo_commented(
    db: Session,
    todo: Todo,
    *,
    actor: User,
) -> Notification | None:
    """Notify the todo creator about a new comment (not their own)."""
    if todo.created_by_id == actor.id:
        return None

    return create_notification(
        db,
        user_id=todo.created_by_id,
        type=NotificationType.TODO_COMMENTED,
        message=f'{actor.email} commented on "{todo.title}"',
        todo_id=todo.id,
    )
