import uuid
from datetime import datetime, timezone

import pytest

from teamtodo.db.enums import ActivityAction
from teamtodo.services import activity_service


@pytest.mark.asyncio
async def test_activity_feed_renders_messages(authed_client, db, test_user, make_todo):
    todo = make_todo(test_user)
    created = activity_service.record_activity(
        db, todo_id=todo.id, actor_id=test_user.id, action=ActivityAction.CREATED
    )
    created.created_at = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
    labelled = activity_service.record_activity(
        db,
        todo_id=todo.id,
        actor_id=test_user.id,
        action=ActivityAction.LABELS_CHANGED,
        field="labels",
        new_value="urgent",
    )
    labelled.created_at = datetime(2026, 1, 1, 9, 5, tzinfo=timezone.utc)
    db.commit()

    response = await authed_client.get(f"/todos/{todo.id}/activities")

    assert response.status_code == 200
    messages = [item["message"] for item in response.json()["items"]]
    assert messages == ['alice added label "urgent"', "alice created this task"]


@pytest.mark.asyncio
async def test_cross_tenant_feed_is_not_found(authed_client, db, other_org, make_user, make_todo):
    outsider = make_user(other_org, email="eve@other.com")
    todo = make_todo(outsider)

    response = await authed_client.get(f"/todos/{todo.id}/activities")
    missing = await authed_client.get(f"/todos/{uuid.uuid4()}/activities")

    assert response.status_code == 404
    assert response.json()["detail"] == "Todo not found"
    assert missing.status_code == 404
    assert missing.json() == response.json()
