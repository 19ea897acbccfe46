"""
Reminder scan - emails todo creators about due-soon and overdue todos.

Each todo is reminded at most once per condition: the matching
``*_reminder_sent_at`` timestamp is stamped after a successful send and
stamped todos are never selected again. Invocations must be serialized
by the scheduler; there is no distributed lock.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from teamtodo.core.config import settings
from teamtodo.core.constants import (
    DUE_SOON_WINDOW_END,
    DUE_SOON_WINDOW_START,
    OVERDUE_WINDOW,
)
from teamtodo.core.structured_logging import build_log_context, mask_email
from teamtodo.db.enums import TodoStatus
from teamtodo.db.models import Todo, User
from teamtodo.services import email_templates
from teamtodo.services.email_sender import EmailSender, get_default_sender

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReminderRunResult:
    due_soon_count: int = 0
    overdue_count: int = 0


def _pending_with_reminders_enabled(db: Session):
    return (
        db.query(Todo, User.email)
        .join(User, User.id == Todo.created_by_id)
        .filter(
            Todo.status == TodoStatus.PENDING.value,
            Todo.due_date.is_not(None),
            User.email_reminders_enabled.is_(True),
        )
    )


def find_due_soon_todos(db: Session, now: datetime) -> list[tuple[Todo, str]]:
    """Pending todos due strictly between now+24h and now+48h, not yet reminded."""
    return (
        _pending_with_reminders_enabled(db)
        .filter(
            Todo.due_date > now + DUE_SOON_WINDOW_START,
            Todo.due_date < now + DUE_SOON_WINDOW_END,
            Todo.due_soon_reminder_sent_at.is_(None),
        )
        .order_by(Todo.due_date.asc(), Todo.id.asc())
        .all()
    )


def find_overdue_todos(db: Session, now: datetime) -> list[tuple[Todo, str]]:
    """Pending todos that went overdue within the last 24h, not yet reminded."""
    return (
        _pending_with_reminders_enabled(db)
        .filter(
            Todo.due_date > now - OVERDUE_WINDOW,
            Todo.due_date < now,
            Todo.overdue_reminder_sent_at.is_(None),
        )
        .order_by(Todo.due_date.asc(), Todo.id.asc())
        .all()
    )


def reminder_idempotency_key(kind: str, todo: Todo) -> str:
    """Stable per reminder occurrence; a moved due date yields a new key."""
    return f"todo-reminder/{kind}/{todo.id}/{todo.due_date.isoformat()}"


def _send(
    sender: EmailSender,
    *,
    to_email: str,
    subject: str,
    html: str,
    todo: Todo,
    idempotency_key: str,
) -> bool:
    # Per-todo isolation: one failing send must not abort the scan.
    try:
        result = sender.send(
            to_email=to_email,
            subject=subject,
            html=html,
            idempotency_key=idempotency_key,
        )
    except Exception:
        logger.exception(
            "Reminder send to %s raised",
            mask_email(to_email),
            extra=build_log_context(todo_id=str(todo.id), org_id=str(todo.tenant_id)),
        )
        return False

    if not result.success:
        logger.warning(
            "Reminder send to %s failed: %s",
            mask_email(to_email),
            result.error,
            extra=build_log_context(todo_id=str(todo.id), org_id=str(todo.tenant_id)),
        )
        return False
    return True


def process_reminders(
    db: Session,
    *,
    now: datetime | None = None,
    sender: EmailSender | None = None,
) -> ReminderRunResult:
    """
    Run one reminder scan.

    Counts are the number of todos newly reminded in this invocation.
    A failed send leaves the timestamp unset so the next scan retries it
    while the todo is still inside its window.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    sender = sender or get_default_sender()
    todos_url = f"{settings.APP_URL.rstrip('/')}/todos"

    due_soon_count = 0
    for todo, email in find_due_soon_todos(db, now):
        html = email_templates.render_due_soon_email(todo.title, todo.due_date, todos_url)
        if not _send(
            sender,
            to_email=email,
            subject=email_templates.due_soon_subject(todo.title),
            html=html,
            todo=todo,
            idempotency_key=reminder_idempotency_key("due_soon", todo),
        ):
            continue
        todo.due_soon_reminder_sent_at = now
        db.commit()
        due_soon_count += 1

    overdue_count = 0
    for todo, email in find_overdue_todos(db, now):
        html = email_templates.render_overdue_email(todo.title, todo.due_date, todos_url)
        if not _send(
            sender,
            to_email=email,
            subject=email_templates.overdue_subject(todo.title),
            html=html,
            todo=todo,
            idempotency_key=reminder_idempotency_key("overdue", todo),
        ):
            continue
        todo.overdue_reminder_sent_at = now
        db.commit()
        overdue_count += 1

    logger.info(
        "Reminder scan complete via %s: %d due soon, %d overdue",
        sender.key,
        due_soon_count,
        overdue_count,
    )
    return ReminderRunResult(due_soon_count=due_soon_count, overdue_count=overdue_count)
