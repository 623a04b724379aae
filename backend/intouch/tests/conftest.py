"""
Shared fixtures: an in-memory SQLite database and per-user API clients.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from intouch.db.base import Base
from intouch.db.session import get_db
from intouch.main import app
from intouch.models import Prompt, User

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test empty tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Create a user row directly, skipping password hashing."""
    def _make_user(username: str) -> User:
        user = User(
            username=username,
            email=f"{username}@example.com",
            hashed_password="not-a-real-hash",
            display_name=username.title()
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_prompt(db):
    """Create a prompt whose week started ``days_ago`` days ago."""
    def _make_prompt(title: str = "Weekly Check-in", days_ago: int = 0, is_active: bool = True) -> Prompt:
        week_start = datetime.utcnow() - timedelta(days=days_ago)
        prompt = Prompt(
            title=title,
            description="Share your high and low",
            type="high-low",
            is_active=is_active,
            week_start=week_start,
            week_end=week_start + timedelta(days=6)
        )
        db.add(prompt)
        db.commit()
        db.refresh(prompt)
        return prompt
    return _make_prompt


@pytest.fixture
def make_client():
    """Register a user over the API and return a client holding their session."""
    def _make_client(username: str) -> TestClient:
        client = TestClient(app)
        response = client.post(
            "/api/auth/register",
            json={
                "username": username,
                "email": f"{username}@example.com",
                "password": "testpassword123",
                "display_name": username.title()
            }
        )
        assert response.status_code == 201, response.text
        client.user = response.json()
        return client
    return _make_client
