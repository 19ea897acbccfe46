"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """Tenant membership roles."""

    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def has_value(cls, value: str) -> bool:
        return value in cls._value2member_map_


class TodoStatus(str, Enum):
    """Todo lifecycle status."""

    PENDING = "pending"
    COMPLETED = "completed"


class RecurrenceType(str, Enum):
    """Repeat interval for a todo. NONE means the todo does not repeat."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class NotificationType(str, Enum):
    """Types of in-app notifications."""

    TODO_ASSIGNED = "todo_assigned"
    TODO_COMMENTED = "todo_commented"


class ActivityAction(str, Enum):
    """Field-level audit actions recorded on a todo."""

    CREATED = "created"
    STATUS_CHANGED = "status_changed"
    ASSIGNEE_CHANGED = "assignee_changed"
    DUE_DATE_CHANGED = "due_date_changed"
    LABELS_CHANGED = "labels_changed"
    DESCRIPTION_CHANGED = "description_changed"


# Defaults used for server_default values
DEFAULT_TODO_STATUS = TodoStatus.PENDING
DEFAULT_RECURRENCE_TYPE = RecurrenceType.NONE
