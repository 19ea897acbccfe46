"""Baseline migration - tenants, users, todos, notifications, activity

Revision ID: 0001_baseline
Revises:
Create Date: 2026-01-15

Creates the full todo lifecycle schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str, nullable: bool = False) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), nullable=nullable)


def upgrade() -> None:
    """Create all tables."""

    # ==========================================================================
    # Tenants & users
    # ==========================================================================
    op.create_table(
        'tenants',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        _timestamp('created_at'),
    )

    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('role', sa.String(20), nullable=False, server_default=sa.text("'member'")),
        sa.Column('email_reminders_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp('created_at'),
    )
    op.create_index('idx_users_tenant', 'users', ['tenant_id'])

    op.create_table(
        'labels',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('color', sa.String(20), nullable=False),
        _timestamp('created_at'),
        sa.UniqueConstraint('tenant_id', 'name', name='uq_labels_tenant_name'),
    )
    op.create_index('idx_labels_tenant', 'labels', ['tenant_id'])

    # ==========================================================================
    # Todos
    # ==========================================================================
    op.create_table(
        'todos',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('tenant_id', sa.Uuid(), sa.ForeignKey('tenants.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('created_by_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('assignee_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default=sa.text("'pending'")),
        _timestamp('due_date', nullable=True),
        sa.Column('recurrence_type', sa.String(20), nullable=False, server_default=sa.text("'none'")),
        _timestamp('due_soon_reminder_sent_at', nullable=True),
        _timestamp('overdue_reminder_sent_at', nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
    )
    op.create_index('idx_todos_tenant_status', 'todos', ['tenant_id', 'status'])
    op.create_index('idx_todos_due', 'todos', ['status', 'due_date'])
    op.create_index('idx_todos_assignee', 'todos', ['assignee_id'])
    op.create_index('idx_todos_created_by', 'todos', ['created_by_id'])

    op.create_table(
        'todo_labels',
        sa.Column('todo_id', sa.Uuid(), sa.ForeignKey('todos.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('label_id', sa.Uuid(), sa.ForeignKey('labels.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_index('idx_todo_labels_label', 'todo_labels', ['label_id'])

    op.create_table(
        'comments',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('todo_id', sa.Uuid(), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('author_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        _timestamp('created_at'),
    )
    op.create_index('idx_comments_todo', 'comments', ['todo_id'])

    op.create_table(
        'subtasks',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('todo_id', sa.Uuid(), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('is_complete', sa.Boolean(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        _timestamp('created_at'),
    )
    op.create_index('idx_subtasks_todo', 'subtasks', ['todo_id'])

    # ==========================================================================
    # Notifications & activity
    # ==========================================================================
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('todo_id', sa.Uuid(), sa.ForeignKey('todos.id', ondelete='SET NULL'), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        _timestamp('created_at'),
    )
    op.create_index('idx_notif_user_unread', 'notifications', ['user_id', 'is_read', 'created_at'])
    op.create_index('idx_notif_user_created', 'notifications', ['user_id', 'created_at'])

    op.create_table(
        'todo_activities',
        sa.Column('seq', sa.BigInteger().with_variant(sa.Integer(), 'sqlite'), primary_key=True, autoincrement=True),
        sa.Column('id', sa.Uuid(), nullable=False, unique=True),
        sa.Column('todo_id', sa.Uuid(), sa.ForeignKey('todos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('actor_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('action', sa.String(50), nullable=False),
        sa.Column('field', sa.String(50), nullable=True),
        sa.Column('old_value', sa.Text(), nullable=True),
        sa.Column('new_value', sa.Text(), nullable=True),
        _timestamp('created_at'),
    )
    op.create_index('idx_todo_activities_todo_created', 'todo_activities', ['todo_id', 'created_at'])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('todo_activities')
    op.drop_table('notifications')
    op.drop_table('subtasks')
    op.drop_table('comments')
    op.drop_table('todo_labels')
    op.drop_table('todos')
    op.drop_table('labels')
    op.drop_table('users')
    op.drop_table('tenants')
