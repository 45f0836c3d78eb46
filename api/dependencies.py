"""
Shared FastAPI dependencies.

Long-lived collaborators (settings, token registry, email service, clock)
live on app.state so each app instance, including the per-route function
apps, carries its own set and tests can swap them without globals.
"""

from datetime import timedelta

from fastapi import Depends, Request
from sqlmodel import Session

from config.settings import Settings
from services.email_service import EmailService
from services.profile_service import ProfileService
from services.token_registry import (
    InMemoryTokenStore,
    SqlTokenStore,
    TokenRegistry,
    TokenStore,
)
from utils.clock import Clock
from utils.database import get_db, get_engine


def build_token_registry(settings: Settings, clock: Clock) -> TokenRegistry:
    """Token registry backed by the store named in settings.TOKEN_STORE."""
    store: TokenStore
    if settings.TOKEN_STORE == "database":
        store = SqlTokenStore(get_engine())
    elif settings.TOKEN_STORE == "memory":
        store = InMemoryTokenStore()
    else:
        raise ValueError(f"Invalid TOKEN_STORE: {settings.TOKEN_STORE}. Must be 'memory' or 'database'")
    return TokenRegistry(store=store, clock=clock, ttl=timedelta(hours=settings.TOKEN_TTL_HOURS))


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_token_registry(request: Request) -> TokenRegistry:
    return request.app.state.token_registry


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


def get_profile_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ProfileService:
    """Get ProfileService instance with injected dependencies."""
    return ProfileService(db, clock=clock)
