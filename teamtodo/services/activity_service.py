"""Activity logging service - append-only field-change history for todos."""

from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from teamtodo.core.constants import UNKNOWN_ACTOR_NAME
from teamtodo.db.enums import ActivityAction
from teamtodo.db.models import Todo, TodoActivity


def record_activity(
    db: Session,
    *,
    todo_id: UUID,
    actor_id: UUID,
    action: ActivityAction,
    field: str | None = None,
    old_value: str | None = None,
    new_value: str | None = None,
) -> TodoActivity:
    """
    Append an activity entry for a todo.

    Args:
        db: Database session
        todo_id: The todo this activity is for
        actor_id: User who performed the change
        action: Type of change (from ActivityAction enum)
        field: Name of the changed field, if any
        old_value: Previous value rendered as a string
        new_value: New value rendered as a string

    Returns:
        The created activity entry
    """
    activity = TodoActivity(
        todo_id=todo_id,
        actor_id=actor_id,
        action=action.value,
        field=field,
        old_value=old_value,
        new_value=new_value,
    )
    db.add(activity)
    db.flush()  # Don't commit - let caller control transaction
    return activity


def get_todo_activities(
    db: Session,
    todo_id: UUID,
    org_id: UUID,
) -> list[TodoActivity] | None:
    """
    Get a todo's activity feed, newest first.

    Returns None when the todo does not exist or belongs to another tenant.
    """
    todo = (
        db.query(Todo.id)
        .filter(Todo.id == todo_id, Todo.tenant_id == org_id)
        .first()
    )
    if not todo:
        return None

    return (
        db.query(TodoActivity)
        .options(joinedload(TodoActivity.actor))
        .filter(TodoActivity.todo_id == todo_id)
        .order_by(TodoActivity.created_at.desc(), TodoActivity.seq.desc())
        .all()
    )


def actor_display_name(email: str | None) -> str:
    """Display name for an actor: the local part of their email."""
    if not email:
        return UNKNOWN_ACTOR_NAME
    return email.split("@", 1)[0]


def render_activity(
    action: ActivityAction | str,
    old_value: str | None,
    new_value: str | None,
    actor_name: str,
) -> str:
    """Human-readable sentence for one activity entry."""
    try:
        action = ActivityAction(action)
    except ValueError:
        return f"{actor_name} made a change"

    if action == ActivityAction.CREATED:
        return f"{actor_name} created this task"
    if action == ActivityAction.STATUS_CHANGED:
        return f"{actor_name} changed status from {old_value} to {new_value}"
    if action == ActivityAction.ASSIGNEE_CHANGED:
        if not old_value and new_value:
            return f"{actor_name} assigned this task"
        if old_value and not new_value:
            return f"{actor_name} removed assignee"
        return f"{actor_name} changed assignee"
    if action == ActivityAction.DUE_DATE_CHANGED:
        if not old_value and new_value:
            return f"{actor_name} set due date"
        if old_value and not new_value:
            return f"{actor_name} removed due date"
        return f"{actor_name} changed due date"
    if action == ActivityAction.LABELS_CHANGED:
        if not old_value and new_value:
            return f'{actor_name} added label "{new_value}"'
        if old_value and not new_value:
            return f'{actor_name} removed label "{old_value}"'
        return f"{actor_name} changed labels"
    return f"{actor_name} updated the description"
