"""
Todo mutation handlers.

Called by the todo CRUD layer after a field change has been applied to the
ORM object. Each handler records the audit entry and runs the side effects
tied to that change (recurring generation, notifications, reminder resets).
Handlers commit their own writes.
"""

from __future__ import annotations

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy.orm import Session

from teamtodo.db.enums import ActivityAction, RecurrenceType, TodoStatus
from teamtodo.db.models import Label, Todo, User
from teamtodo.services import activity_service, notification_service, recurring_todo_service

logger = logging.getLogger(__name__)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value else None


def on_todo_created(db: Session, todo: Todo, actor_id: UUID) -> None:
    activity_service.record_activity(
        db, todo_id=todo.id, actor_id=actor_id, action=ActivityAction.CREATED
    )
    db.commit()


def on_status_changed(
    db: Session,
    todo: Todo,
    *,
    actor_id: UUID,
    old_status: str,
) -> Todo | None:
    """
    Record a status change.

    Completing a repeating todo materializes its next occurrence, which is
    returned. Reopening never generates anything.
    """
    if old_status == todo.status:
        return None

    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor_id,
        action=ActivityAction.STATUS_CHANGED,
        field="status",
        old_value=old_status,
        new_value=todo.status,
    )
    db.commit()

    if (
        todo.status == TodoStatus.COMPLETED.value
        and todo.recurrence_type != RecurrenceType.NONE.value
    ):
        return recurring_todo_service.generate_next_todo(db, todo.id, todo.tenant_id)
    return None


def on_assignee_changed(
    db: Session,
    todo: Todo,
    *,
    actor: User,
    old_assignee_id: UUID | None,
) -> None:
    if old_assignee_id == todo.assignee_id:
        return

    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor.id,
        action=ActivityAction.ASSIGNEE_CHANGED,
        field="assignee",
        old_value=_str_or_none(old_assignee_id),
        new_value=_str_or_none(todo.assignee_id),
    )
    db.commit()

    notification_service.notify_todo_assigned(
        db, todo, actor=actor, assignee_id=todo.assignee_id
    )


def on_due_date_changed(
    db: Session,
    todo: Todo,
    *,
    actor_id: UUID,
    old_due_date: datetime | None,
) -> None:
    """Record a due date change and re-arm both reminders for the new date."""
    if old_due_date == todo.due_date:
        return

    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor_id,
        action=ActivityAction.DUE_DATE_CHANGED,
        field="due_date",
        old_value=_iso(old_due_date),
        new_value=_iso(todo.due_date),
    )
    todo.due_soon_reminder_sent_at = None
    todo.overdue_reminder_sent_at = None
    db.commit()


def on_label_added(db: Session, todo: Todo, label: Label, *, actor_id: UUID) -> None:
    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor_id,
        action=ActivityAction.LABELS_CHANGED,
        field="labels",
        old_value=None,
        new_value=label.name,
    )
    db.commit()


def on_label_removed(db: Session, todo: Todo, label: Label, *, actor_id: UUID) -> None:
    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor_id,
        action=ActivityAction.LABELS_CHANGED,
        field="labels",
        old_value=label.name,
        new_value=None,
    )
    db.commit()


def on_description_changed(
    db: Session,
    todo: Todo,
    *,
    actor_id: UUID,
    old_description: str | None,
) -> None:
    if (old_description or None) == (todo.description or None):
        return

    activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=actor_id,
        action=ActivityAction.DESCRIPTION_CHANGED,
        field="description",
        old_value=old_description,
        new_value=todo.description,
    )
    db.commit()


def on_comment_added(db: Session, todo: Todo, *, actor: User) -> None:
    notification = notification_service.notify_todo_commented(db, todo, actor=actor)
    if notification is None:
        logger.debug("Comment notification skipped for self-comment on todo %s", todo.id)
