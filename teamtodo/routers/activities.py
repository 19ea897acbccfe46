"""Activity feed endpoint for a single todo."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from teamtodo.core.deps import get_current_session, get_db
from teamtodo.schemas.auth import UserSession
from teamtodo.services import activity_service


router = APIRouter()


class ActivityRead(BaseModel):
    id: str
    actor_id: str
    actor_email: str | None
    action: str
    field: str | None
    old_value: str | None
    new_value: str | None
    message: str
    created_at: str


class ActivityListResponse(BaseModel):
    items: list[ActivityRead]


@router.get("/{todo_id}/activities", response_model=ActivityListResponse)
def list_todo_activities(
    todo_id: UUID,
    session: UserSession = Depends(get_current_session),
    db: Session = Depends(get_db),
):
    """Get a todo's change history, newest first."""
    activities = activity_service.get_todo_activities(db, todo_id, session.org_id)
    if activities is None:
        raise HTTPException(status_code=404, detail="Todo not found")

    items = []
    for a in activities:
        actor_email = a.actor.email if a.actor else None
        items.append(ActivityRead(
            id=str(a.id),
            actor_id=str(a.actor_id),
            actor_email=actor_email,
            action=a.action,
            field=a.field,
            old_value=a.old_value,
            new_value=a.new_value,
            message=activity_service.render_activity(
                a.action,
                a.old_value,
                a.new_value,
                activity_service.actor_display_name(actor_email),
            ),
            created_at=a.created_at.isoformat(),
        ))

    return ActivityListResponse(items=items)
