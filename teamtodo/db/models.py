"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    false,
    text,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamtodo.db.base import Base
from teamtodo.db.enums import (
    DEFAULT_RECURRENCE_TYPE,
    DEFAULT_TODO_STATUS,
    Role,
)
from teamtodo.db.types import utcnow


class Tenant(Base):
    """An isolated organization. Every other row belongs to exactly one tenant."""

    __tablename__ = "tenants"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    users: Mapped[list["User"]] = relationship(back_populates="tenant")


class User(Base):
    """Tenant member. Credentials live in the auth service, not here."""

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_tenant", "tenant_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    role: Mapped[str] = mapped_column(
        String(20), default=Role.MEMBER.value, server_default=text("'member'"), nullable=False
    )
    email_reminders_enabled: Mapped[bool] = mapped_column(
        Boolean, default=True, server_default=true(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    tenant: Mapped["Tenant"] = relationship(back_populates="users")


class Label(Base):
    """Tenant-scoped label that can be attached to many todos."""

    __tablename__ = "labels"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_labels_tenant_name"),
        Index("idx_labels_tenant", "tenant_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str] = mapped_column(String(20), nullable=False, default="#6b7280")
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)


class Todo(Base):
    """
    A shared task.

    Reminder timestamps are the idempotency guard for the reminder scan:
    once set they are only cleared when the due date itself changes.
    """

    __tablename__ = "todos"
    __table_args__ = (
        Index("idx_todos_tenant_status", "tenant_id", "status"),
        Index("idx_todos_due", "status", "due_date"),
        Index("idx_todos_assignee", "assignee_id"),
        Index("idx_todos_created_by", "created_by_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False
    )
    created_by_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    assignee_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_TODO_STATUS.value,
        server_default=text(f"'{DEFAULT_TODO_STATUS.value}'"),
        nullable=False,
    )
    due_date: Mapped[datetime | None] = mapped_column(nullable=True)
    recurrence_type: Mapped[str] = mapped_column(
        String(20),
        default=DEFAULT_RECURRENCE_TYPE.value,
        server_default=text(f"'{DEFAULT_RECURRENCE_TYPE.value}'"),
        nullable=False,
    )

    # Reminder idempotency guards
    due_soon_reminder_sent_at: Mapped[datetime | None] = mapped_column(nullable=True)
    overdue_reminder_sent_at: Mapped[datetime | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    created_by: Mapped["User"] = relationship(foreign_keys=[created_by_id])
    assignee: Mapped["User | None"] = relationship(foreign_keys=[assignee_id])
    label_links: Mapped[list["TodoLabel"]] = relationship(
        back_populates="todo", cascade="all, delete-orphan", passive_deletes=True
    )
    labels: Mapped[list["Label"]] = relationship(
        secondary="todo_labels", order_by="Label.name", viewonly=True
    )
    comments: Mapped[list["Comment"]] = relationship(
        back_populates="todo", cascade="all, delete-orphan", passive_deletes=True
    )
    subtasks: Mapped[list["Subtask"]] = relationship(
        back_populates="todo",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Subtask.position",
    )
    activities: Mapped[list["TodoActivity"]] = relationship(
        back_populates="todo", cascade="all, delete-orphan", passive_deletes=True
    )


class TodoLabel(Base):
    """Association row between a todo and a label."""

    __tablename__ = "todo_labels"
    __table_args__ = (Index("idx_todo_labels_label", "label_id"),)

    todo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("todos.id", ondelete="CASCADE"), primary_key=True
    )
    label_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("labels.id", ondelete="CASCADE"), primary_key=True
    )

    todo: Mapped["Todo"] = relationship(back_populates="label_links")
    label: Mapped["Label"] = relationship()


class Comment(Base):
    """Discussion entry on a todo."""

    __tablename__ = "comments"
    __table_args__ = (Index("idx_comments_todo", "todo_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    todo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    todo: Mapped["Todo"] = relationship(back_populates="comments")


class Subtask(Base):
    """Checklist item inside a todo."""

    __tablename__ = "subtasks"
    __table_args__ = (Index("idx_subtasks_todo", "todo_id"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    todo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    is_complete: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    todo: Mapped["Todo"] = relationship(back_populates="subtasks")


class Notification(Base):
    """
    In-app notification for one recipient.

    The message is rendered at creation time. todo_id is nulled when the todo
    is deleted; the notification stays readable and markable.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notif_user_unread", "user_id", "is_read", "created_at"),
        Index("idx_notif_user_created", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    todo_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("todos.id", ondelete="SET NULL"), nullable=True
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    user: Mapped["User"] = relationship()


class TodoActivity(Base):
    """
    Append-only audit entry for a single field change on a todo.

    old_value/new_value are plain strings shared across all actions; rendering
    interprets them per action.
    """

    __tablename__ = "todo_activities"
    __table_args__ = (Index("idx_todo_activities_todo_created", "todo_id", "created_at"),)

    # Insertion order; breaks created_at ties in the feed.
    # SQLite only autoincrements an INTEGER PRIMARY KEY.
    seq: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, default=uuid.uuid4, nullable=False)
    todo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("todos.id", ondelete="CASCADE"), nullable=False
    )
    actor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    field: Mapped[str | None] = mapped_column(String(50), nullable=True)
    old_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    new_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    todo: Mapped["Todo"] = relationship(back_populates="activities")
    actor: Mapped["User"] = relationship()
