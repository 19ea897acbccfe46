"""
Test configuration and fixtures.

Provides:
- In-memory SQLite database, tables created and dropped around each test
- Tenant, user, label and todo factories
- JWT token minting for authenticated tests
- HTTPX AsyncClient with proper headers
"""
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable, Generator

# Must be set before any teamtodo module reads settings
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from teamtodo.core.deps import COOKIE_NAME, get_db
from teamtodo.core.security import create_session_token
from teamtodo.db.base import Base
from teamtodo.db.enums import RecurrenceType, Role, TodoStatus
from teamtodo.db.models import Label, Tenant, Todo, User
from teamtodo.db.session import SessionLocal, engine
from teamtodo.main import app
from teamtodo.services.email_sender import EmailSendResult


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Fresh schema per test.

    App code calls commit() freely; dropping the tables afterwards
    gives the next test a clean database.
    """
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_org(db: Session) -> Tenant:
    """Create a test tenant."""
    org = Tenant(id=uuid.uuid4(), name="Test Organization")
    db.add(org)
    db.commit()
    return org


@pytest.fixture(scope="function")
def other_org(db: Session) -> Tenant:
    """Second tenant for isolation checks."""
    org = Tenant(id=uuid.uuid4(), name="Other Organization")
    db.add(org)
    db.commit()
    return org


@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., User]:
    def _make_user(tenant: Tenant, email: str | None = None, **kwargs) -> User:
        user = User(
            id=uuid.uuid4(),
            tenant_id=tenant.id,
            email=email or f"user-{uuid.uuid4().hex[:8]}@test.com",
            role=kwargs.pop("role", Role.MEMBER.value),
            **kwargs,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture(scope="function")
def test_user(make_user, test_org: Tenant) -> User:
    """Create a test user (admin) in test_org."""
    return make_user(test_org, email="alice@test.com", role=Role.ADMIN.value)


@pytest.fixture(scope="function")
def second_user(make_user, test_org: Tenant) -> User:
    """Another member of test_org."""
    return make_user(test_org, email="bob@test.com")


@pytest.fixture(scope="function")
def make_label(db: Session) -> Callable[..., Label]:
    def _make_label(tenant: Tenant, name: str, color: str = "#ef4444") -> Label:
        label = Label(id=uuid.uuid4(), tenant_id=tenant.id, name=name, color=color)
        db.add(label)
        db.commit()
        return label

    return _make_label


@pytest.fixture(scope="function")
def make_todo(db: Session) -> Callable[..., Todo]:
    def _make_todo(
        creator: User,
        title: str = "Write report",
        *,
        due_date: datetime | None = None,
        recurrence_type: RecurrenceType = RecurrenceType.NONE,
        status: TodoStatus = TodoStatus.PENDING,
        **kwargs,
    ) -> Todo:
        todo = Todo(
            id=uuid.uuid4(),
            tenant_id=creator.tenant_id,
            created_by_id=creator.id,
            title=title,
            due_date=due_date,
            recurrence_type=recurrence_type.value,
            status=status.value,
            **kwargs,
        )
        db.add(todo)
        db.commit()
        return todo

    return _make_todo


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Email Fakes
# =============================================================================

class FakeEmailSender:
    """Records sends; fails for addresses in ``fail_for``."""

    key = "fake"

    def __init__(self, fail_for: set[str] | None = None, raise_for: set[str] | None = None):
        self.sent: list[dict] = []
        self.fail_for = fail_for or set()
        self.raise_for = raise_for or set()

    def send(self, *, to_email: str, subject: str, html: str, idempotency_key: str | None = None):
        if to_email in self.raise_for:
            raise RuntimeError("connection reset")
        if to_email in self.fail_for:
            return EmailSendResult(success=False, error="mailbox unavailable")
        self.sent.append(
            {
                "to_email": to_email,
                "subject": subject,
                "html": html,
                "idempotency_key": idempotency_key,
            }
        )
        return EmailSendResult(success=True, message_id=f"msg-{len(self.sent)}")


@pytest.fixture
def fake_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def make_sender() -> Callable[..., FakeEmailSender]:
    return FakeEmailSender


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    __test__ = False

    user: User
    org: Tenant
    token: str
    cookie_name: str = COOKIE_NAME


@pytest.fixture(scope="function")
def test_auth(test_user: User, test_org: Tenant) -> TestAuth:
    """Create JWT token for test user."""
    token = create_session_token(
        user_id=test_user.id,
        org_id=test_org.id,
        role=test_user.role,
    )
    return TestAuth(user=test_user, org=test_org, token=token)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    test_auth: TestAuth,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated AsyncClient with JWT cookie and CSRF header.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        cookies={test_auth.cookie_name: test_auth.token},
        headers={"X-Requested-With": "XMLHttpRequest"},  # CSRF header
    ) as c:
        yield c

    app.dependency_overrides.clear()
