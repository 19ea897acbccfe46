"""User preference service."""

from uuid import UUID

from sqlalchemy.orm import Session

from teamtodo.db.models import User


def get_user_by_id(db: Session, user_id: UUID) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_email_reminders_enabled(db: Session, user_id: UUID) -> bool | None:
    """Whether the user receives reminder emails; None for unknown users."""
    user = get_user_by_id(db, user_id)
    if not user:
        return None
    return user.email_reminders_enabled


def update_email_reminders_enabled(
    db: Session,
    user_id: UUID,
    enabled: bool,
) -> bool | None:
    """Toggle reminder emails. Returns the stored value, or None for unknown users."""
    user = get_user_by_id(db, user_id)
    if not user:
        return None
    user.email_reminders_enabled = enabled
    db.commit()
    db.refresh(user)
    return user.email_reminders_enabled
