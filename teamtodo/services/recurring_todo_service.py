"""Recurring todo generation - materializes the next occurrence of a completed todo."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from teamtodo.core.structured_logging import build_log_context
from teamtodo.db.enums import RecurrenceType, TodoStatus
from teamtodo.db.models import Todo, TodoLabel
from teamtodo.services import recurrence

logger = logging.getLogger(__name__)


def generate_next_todo(
    db: Session,
    todo_id: UUID,
    org_id: UUID | None = None,
) -> Todo | None:
    """
    Create the next occurrence of a repeating todo.

    Returns None (and creates nothing) when the todo does not exist, is in a
    different tenant than ``org_id``, does not repeat, or has no due date.

    Copies title, description, recurrence, assignee, creator and labels.
    Comments, subtasks, activity history and reminder state are NOT copied.
    The new todo and its label links are committed together.
    """
    query = db.query(Todo).filter(Todo.id == todo_id)
    if org_id is not None:
        query = query.filter(Todo.tenant_id == org_id)
    source = query.first()

    if not source:
        logger.debug("Recurring generation skipped: todo not found", extra=build_log_context(todo_id=str(todo_id)))
        return None
    if source.recurrence_type == RecurrenceType.NONE.value or not source.due_date:
        return None

    next_due = recurrence.next_due_date(source.due_date, source.recurrence_type)
    if next_due is None:
        return None

    tenant_id = source.tenant_id
    label_ids = [link.label_id for link in source.label_links]

    try:
        next_todo = Todo(
            tenant_id=source.tenant_id,
            created_by_id=source.created_by_id,
            assignee_id=source.assignee_id,
            title=source.title,
            description=source.description,
            recurrence_type=source.recurrence_type,
            status=TodoStatus.PENDING.value,
            due_date=next_due,
            due_soon_reminder_sent_at=None,
            overdue_reminder_sent_at=None,
        )
        db.add(next_todo)
        db.flush()

        for label_id in label_ids:
            db.add(TodoLabel(todo_id=next_todo.id, label_id=label_id))

        db.commit()
    except Exception:
        db.rollback()
        logger.exception(
            "Recurring generation failed; nothing was created",
            extra=build_log_context(todo_id=str(todo_id), org_id=str(tenant_id)),
        )
        raise

    db.refresh(next_todo)
    logger.info(
        "Generated next occurrence %s (due %s) with %d labels",
        next_todo.id,
        next_due.isoformat(),
        len(label_ids),
        extra=build_log_context(todo_id=str(todo_id), org_id=str(tenant_id)),
    )
    return next_todo
