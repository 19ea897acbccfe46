from datetime import datetime, timedelta, timezone

import pytest

from teamtodo.core.config import settings
from teamtodo.services import reminder_service


@pytest.mark.asyncio
async def test_reminders_endpoint_runs_scan(client, db, test_user, make_todo, fake_sender, monkeypatch):
    monkeypatch.setattr(settings, "INTERNAL_SECRET", "secret")
    monkeypatch.setattr(reminder_service, "get_default_sender", lambda: fake_sender)
    now = datetime.now(timezone.utc)
    make_todo(test_user, "Soon", due_date=now + timedelta(hours=30))
    make_todo(test_user, "Late", due_date=now - timedelta(hours=3))

    response = await client.post(
        "/internal/scheduled/reminders",
        headers={"X-Internal-Secret": "secret"},
    )

    assert response.status_code == 200
    assert response.json() == {"due_soon_sent": 1, "overdue_sent": 1}
    assert len(fake_sender.sent) == 2


@pytest.mark.asyncio
async def test_reminders_endpoint_rejects_wrong_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "INTERNAL_SECRET", "secret")

    response = await client.post(
        "/internal/scheduled/reminders",
        headers={"X-Internal-Secret": "nope"},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_reminders_endpoint_requires_configured_secret(client, monkeypatch):
    monkeypatch.setattr(settings, "INTERNAL_SECRET", "")

    response = await client.post(
        "/internal/scheduled/reminders",
        headers={"X-Internal-Secret": "anything"},
    )

    assert response.status_code == 501


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
