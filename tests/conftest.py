"""
Shared fixtures.

The app runs against an in-memory SQLite database (one shared connection);
service tests get their own throwaway engine.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "s3cret-pass"
os.environ["CLAIM_WINDOW_MINUTES"] = "60"
os.environ["SEED_SAMPLE_CAMPAIGN"] = "0"
os.environ["AUTO_CREATE_TABLES"] = "1"

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from videowalker.core.clock import get_now
from videowalker.db.base import Base
from videowalker.db.session import SessionLocal
from videowalker.main import app
from videowalker.models import Campaign, Winner

T0 = datetime(2026, 3, 1, 12, 0, 0)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def make_campaign(**overrides) -> Campaign:
    data = dict(
        id="c1",
        sponsor_name="TechFlow Pro",
        sponsor_tagline="Revolutionizing Digital Innovation",
        sponsor_website="https://example.com",
        poster_url="https://cdn.example.com/poster.png",
        secret_code="WIN1",
        mystery_description="A mystery gift",
        prize_value="$200+",
        countdown_end=T0 + timedelta(minutes=30),
        is_active=True,
        has_winner=False,
        winner_image_url=None,
        created_at=T0 - timedelta(days=1),
    )
    data.update(overrides)
    return Campaign(**data)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def clock():
    return FrozenClock(T0)


@pytest.fixture
def client(clock):
    app.dependency_overrides[get_now] = lambda: clock.now
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

    s = SessionLocal()
    try:
        s.query(Winner).delete()
        s.query(Campaign).delete()
        s.commit()
    finally:
        s.close()


@pytest.fixture
def admin_headers(client):
    r = client.post("/api/auth/login", json={"username": "admin", "password": "s3cret-pass"})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['accessToken']}"}


@pytest.fixture
def campaign_payload():
    return {
        "sponsorName": "TechFlow Pro",
        "sponsorTagline": "Revolutionizing Digital Innovation",
        "sponsorWebsite": "https://example.com",
        "posterUrl": "https://cdn.example.com/poster.png",
        "secretCode": "WIN1",
        "mysteryDescription": "A mystery gift worth over $200",
        "prizeValue": "$200+",
        "countdownEnd": (T0 + timedelta(minutes=30)).isoformat(),
    }
