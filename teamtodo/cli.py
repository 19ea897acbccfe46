"""CLI tools for TeamTodo operations."""

from datetime import datetime, timezone

import click

from teamtodo.core.config import settings
from teamtodo.core.structured_logging import configure_logging
from teamtodo.db.session import SessionLocal, engine


@click.group()
def cli():
    """TeamTodo CLI tools."""
    configure_logging(settings.LOG_LEVEL)


@cli.command()
@click.option(
    "--now",
    "now_value",
    default=None,
    help="Evaluate windows as of this ISO-8601 timestamp (UTC assumed when naive)",
)
def process_reminders(now_value: str | None):
    """
    Run one reminder scan and print how many emails went out.

    Schedule every few minutes; never run two scans at the same time.

    Example:
        teamtodo process-reminders
    """
    from teamtodo.services import reminder_service

    now = None
    if now_value:
        try:
            now = datetime.fromisoformat(now_value)
        except ValueError:
            raise click.BadParameter(f"not an ISO-8601 timestamp: {now_value}", param_hint="--now")
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

    db = SessionLocal()
    try:
        result = reminder_service.process_reminders(db, now=now)
    finally:
        db.close()

    click.echo(f"✓ Due-soon reminders sent: {result.due_soon_count}")
    click.echo(f"✓ Overdue reminders sent: {result.overdue_count}")


@cli.command()
def init_db():
    """Create all tables (local development only; use Alembic elsewhere)."""
    from teamtodo.db import models  # noqa: F401  (registers tables)
    from teamtodo.db.base import Base

    Base.metadata.create_all(bind=engine)
    click.echo("✓ Tables created")


if __name__ == "__main__":
    cli()
