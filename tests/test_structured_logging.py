from teamtodo.core.structured_logging import build_log_context, mask_email


def test_build_log_context_drops_empty_fields():
    context = build_log_context(user_id="u1", org_id=None, todo_id="t1", route="")
    assert context == {"user_id": "u1", "todo_id": "t1"}


def test_mask_email():
    assert mask_email("alice@example.com") == "a***@example.com"
    assert mask_email("not-an-email") == "***"
    assert mask_email(None) == "<none>"
