"""
Shared fixtures for the Report Desk tests.
"""
import os
from datetime import datetime, timedelta

import pytest

# env must be set BEFORE importing the app: settings and engine are built at import
os.environ["APP_DATABASE_URL"] = "sqlite://"
os.environ["APP_JWT_SECRET_KEY"] = "test-secret-key-for-testing-0123456789abcdef"
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["APP_LOG_LEVEL"] = "DEBUG"

from fastapi.testclient import TestClient

from reportdesk.core.db import Base, SessionLocal, engine
from reportdesk.core.security import issue_session_token
from reportdesk.main import app
from reportdesk.models.enums import ReportType, Role
from reportdesk.models.report import Report
from reportdesk.models.user import User


@pytest.fixture(scope="function")
def db():
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin(db):
    user = User(email="admin@servihub.com", name="Admin User", role=Role.ADMIN)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def plain_user(db):
    user = User(email="user1@servihub.com", name="User One", role=Role.USER)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_client(client, admin):
    """Client carrying the admin's session cookie from a real login."""
    resp = client.post("/login", json={"email": admin.email})
    assert resp.status_code == 202
    return client


@pytest.fixture
def user_client(client, plain_user):
    resp = client.post("/login", json={"email": plain_user.email})
    assert resp.status_code == 403
    return client


@pytest.fixture
def token_for():
    def _token(user: User, **kwargs) -> str:
        return issue_session_token(user.id, user.role.value, user.email, **kwargs)

    return _token


@pytest.fixture
def make_reports(db):
    """Insert ``count`` reports with strictly increasing created_at."""

    def _make(count, type=ReportType.REVIEW, resolved_by=None, start=None, submitted_by=None):
        base = start or datetime(2025, 1, 1, 12, 0, 0)
        rows = []
        for i in range(count):
            created = base + timedelta(minutes=i)
            rows.append(
                Report(
                    type=type,
                    target_id=100 + i,
                    reason=f"reason {i}",
                    submitted_by=submitted_by,
                    resolved_by=resolved_by,
                    resolved_at=created + timedelta(hours=1) if resolved_by else None,
                    created_at=created,
                )
            )
        db.add_all(rows)
        db.commit()
        return rows

    return _make
