from datetime import datetime, timedelta, timezone

from teamtodo.services import email_templates


def test_format_due_date_uses_utc_calendar_day():
    late_evening_pacific = datetime(2025, 1, 14, 20, 0, tzinfo=timezone(timedelta(hours=-8)))
    assert email_templates.format_due_date(late_evening_pacific) == "January 15, 2025"


def test_subjects():
    assert email_templates.due_soon_subject("Pay rent") == "Reminder: Pay rent is due soon"
    assert email_templates.overdue_subject("Pay rent") == "Overdue: Pay rent"


def test_due_soon_body_names_todo_and_links_to_app():
    html = email_templates.render_due_soon_email(
        "Pay rent",
        datetime(2025, 1, 15, 9, 0, tzinfo=timezone.utc),
        "https://todo.example.com/todos",
    )

    assert "Your todo <strong>Pay rent</strong> is due soon." in html
    assert "Due date: January 15, 2025" in html
    assert 'href="https://todo.example.com/todos"' in html


def test_overdue_body_escapes_title():
    html = email_templates.render_overdue_email(
        '<script>alert("x")</script>',
        datetime(2025, 1, 15, tzinfo=timezone.utc),
        "https://todo.example.com/todos",
    )

    assert "<script>" not in html
    assert "was due on January 15, 2025." in html
