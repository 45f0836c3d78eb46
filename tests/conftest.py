"""
Shared fixtures: in-memory SQLite, a controllable clock and app/client factories.

Run: pytest tests -v
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

import models  # noqa: F401  (registers tables)
from api.main import create_app
from config.settings import Settings
from services.email_service import EmailService
from services.token_registry import InMemoryTokenStore, TokenRegistry
from utils.database import build_engine, get_db


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = datetime(2026, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def registry(clock):
    return TokenRegistry(store=InMemoryTokenStore(), clock=clock)


def build_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "AUTO_CREATE_TABLES": False,
        "EMAIL_ENABLED": False,
        "DEBUG": False,
        "TOKEN_STORE": "memory",
        "ALLOW_UNREGISTERED_TOKENS": True,
        "SINGLE_USE_TOKENS": False,
        "PUBLIC_BASE_URL": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def make_settings():
    """Settings factory with test-safe defaults (no SMTP, in-memory tokens)."""
    return build_settings


@pytest.fixture
def app_factory(engine, clock):
    """
    Build an app wired to the test engine and fake clock.

    Usage:
        app = app_factory(ALLOW_UNREGISTERED_TOKENS=False)
    """

    def override_get_db():
        with Session(engine) as session:
            yield session

    def factory(token_registry=None, email_service=None, routers=None, **setting_overrides):
        settings = build_settings(**setting_overrides)
        kwargs = {}
        if routers is not None:
            kwargs["routers"] = routers
        app = create_app(
            settings=settings,
            token_registry=token_registry or TokenRegistry(store=InMemoryTokenStore(), clock=clock),
            email_service=email_service or EmailService(settings),
            clock=clock,
            **kwargs,
        )
        app.dependency_overrides[get_db] = override_get_db
        return app

    return factory


@pytest.fixture
def client_factory(app_factory):
    def factory(**kwargs) -> TestClient:
        return TestClient(app_factory(**kwargs))

    return factory


@pytest.fixture
def client(client_factory):
    return client_factory()
