"""
Database utilities and engine management.

This module provides the core database engine that can be used by any layer:
- API routes
- Services
- Repositories
- Scripts

No dependencies on higher-level modules (api, services).
"""

from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from config.settings import settings


def build_engine(db_url: str) -> Engine:
    """
    Create an engine for the given URL.

    Note:
        PostgreSQL URLs use the psycopg (v3) driver with client-side prepared
        statements disabled for PgBouncer/connection pooler compatibility.
        SQLite URLs allow cross-thread use because FastAPI runs sync routes
        in a threadpool; in-memory SQLite shares a single connection.
    """
    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, **kwargs)

    # Convert postgresql:// to postgresql+psycopg:// for psycopg3 driver
    if db_url.startswith("postgresql://"):
        db_url = db_url.replace("postgresql://", "postgresql+psycopg://", 1)

    return create_engine(
        db_url,
        connect_args={
            "prepare_threshold": None,  # Disable prepared statements for pooler compatibility
            "connect_timeout": 10,
        },
        pool_pre_ping=True,  # Verify connection before use
        pool_recycle=300,
        pool_size=3,
        max_overflow=2,
        pool_timeout=30,
    )


@lru_cache()
def get_engine() -> Engine:
    """
    Get cached database engine.

    Returns:
        SQLAlchemy engine singleton built from settings.DATABASE_URL
    """
    return build_engine(settings.DATABASE_URL)


def init_db(engine: Optional[Engine] = None) -> None:
    """Create the profile and access token tables if they do not exist."""
    # Register table metadata
    import models  # noqa: F401

    SQLModel.metadata.create_all(engine or get_engine())


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Yields:
        SQLModel Session that auto-closes after request

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            ...
    """
    engine = get_engine()
    with Session(engine) as session:
        yield session
