"""
Internal endpoints for scheduled/cron operations.

Protected by X-Internal-Secret header.
Call from external cron every few minutes; runs must not overlap.
"""

from fastapi import APIRouter, Depends, Header, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from teamtodo.core.config import settings
from teamtodo.core.deps import get_db
from teamtodo.services import reminder_service


router = APIRouter(prefix="/internal/scheduled", tags=["internal"])


def verify_internal_secret(x_internal_secret: str = Header(...)) -> None:
    """Verify the internal secret header."""
    expected = settings.INTERNAL_SECRET
    if not expected:
        raise HTTPException(status_code=501, detail="INTERNAL_SECRET not configured")
    if x_internal_secret != expected:
        raise HTTPException(status_code=403, detail="Invalid internal secret")


class ReminderRunResponse(BaseModel):
    due_soon_sent: int
    overdue_sent: int


@router.post(
    "/reminders",
    response_model=ReminderRunResponse,
    dependencies=[Depends(verify_internal_secret)],
)
def run_reminders(db: Session = Depends(get_db)):
    """
    Reminder sweep.

    Emails creators of pending todos that are due in 24-48 hours or went
    overdue in the last 24 hours. Each todo is emailed at most once per window.
    """
    result = reminder_service.process_reminders(db)
    return ReminderRunResponse(
        due_soon_sent=result.due_soon_count,
        overdue_sent=result.overdue_count,
    )
