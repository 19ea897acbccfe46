"""HTML bodies for reminder emails."""

from __future__ import annotations

import html
from datetime import datetime, timezone

_BODY_STYLE = (
    "background-color:#f6f9fc;"
    "font-family:-apple-system,BlinkMacSystemFont,'Segoe UI',Roboto,'Helvetica Neue',Ubuntu,sans-serif;"
)
_CONTAINER_STYLE = (
    "background-color:#ffffff;margin:0 auto;padding:40px 20px;max-width:580px;border-radius:4px;"
)
_HEADING_STYLE = "color:#1f2937;font-size:24px;font-weight:600;line-height:1.25;margin-bottom:24px;"
_TEXT_STYLE = "color:#374151;font-size:16px;line-height:1.5;margin-bottom:24px;"
_BUTTON_STYLE = (
    "background-color:#2563eb;border-radius:6px;color:#ffffff;display:inline-block;"
    "font-size:16px;font-weight:600;line-height:1;padding:12px 24px;text-decoration:none;"
)
_LINK_TEXT_STYLE = "color:#6b7280;font-size:14px;line-height:1.5;margin-top:24px;"
_LINK_STYLE = "color:#2563eb;text-decoration:underline;"


def format_due_date(value: datetime) -> str:
    """Human-readable UTC date, e.g. "January 15, 2025"."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return f"{value:%B} {value.day}, {value.year}"


def due_soon_subject(todo_title: str) -> str:
    return f"Reminder: {todo_title} is due soon"


def overdue_subject(todo_title: str) -> str:
    return f"Overdue: {todo_title}"


def _layout(heading: str, paragraphs: list[str], app_url: str) -> str:
    url = html.escape(app_url, quote=True)
    body = "".join(f'<p style="{_TEXT_STYLE}">{p}</p>' for p in paragraphs)
    return (
        "<!DOCTYPE html>"
        f'<html><head><meta charset="utf-8"></head><body style="{_BODY_STYLE}">'
        f'<div style="{_CONTAINER_STYLE}">'
        f'<h1 style="{_HEADING_STYLE}">{html.escape(heading)}</h1>'
        f"{body}"
        f'<a href="{url}" style="{_BUTTON_STYLE}">View Todos</a>'
        f'<p style="{_LINK_TEXT_STYLE}">Or copy this link: '
        f'<a href="{url}" style="{_LINK_STYLE}">{url}</a></p>'
        "</div></body></html>"
    )


def render_due_soon_email(todo_title: str, due_date: datetime, app_url: str) -> str:
    """Reminder for a todo due in the next 24-48 hours."""
    title = html.escape(todo_title)
    return _layout(
        "Reminder",
        [
            f"Your todo <strong>{title}</strong> is due soon.",
            f"Due date: {format_due_date(due_date)}",
        ],
        app_url,
    )


def render_overdue_email(todo_title: str, due_date: datetime, app_url: str) -> str:
    """Reminder for a todo that went overdue in the past 24 hours."""
    title = html.escape(todo_title)
    return _layout(
        "Overdue",
        [f"Your todo <strong>{title}</strong> was due on {format_due_date(due_date)}."],
        app_url,
    )
