from datetime import datetime, timedelta, timezone

from click.testing import CliRunner

from teamtodo.cli import cli
from teamtodo.services import reminder_service


def test_process_reminders_prints_counts(db, test_user, make_todo, fake_sender, monkeypatch):
    monkeypatch.setattr(reminder_service, "get_default_sender", lambda: fake_sender)
    now = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
    make_todo(test_user, "Soon", due_date=now + timedelta(hours=30))

    result = CliRunner().invoke(cli, ["process-reminders", "--now", "2026-03-10T12:00:00"])

    assert result.exit_code == 0, result.output
    assert "Due-soon reminders sent: 1" in result.output
    assert "Overdue reminders sent: 0" in result.output
    assert fake_sender.sent[0]["to_email"] == test_user.email


def test_process_reminders_rejects_bad_timestamp(db):
    result = CliRunner().invoke(cli, ["process-reminders", "--now", "tomorrow"])

    assert result.exit_code != 0
    assert "ISO-8601" in result.output


def test_init_db_creates_tables(db):
    result = CliRunner().invoke(cli, ["init-db"])

    assert result.exit_code == 0
    assert "Tables created" in result.output
