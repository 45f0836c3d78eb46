from datetime import datetime

import sqlalchemy as sa
from sqlmodel import SQLModel, Field


class AccessToken(SQLModel, table=True):
    """Persisted access token, used when token state must outlive a single process."""

    __tablename__ = "access_tokens"

    token: str = Field(primary_key=True)
    recipient_email: str = Field(nullable=False, index=True)
    # Naive UTC, compared against utils.clock.utc_now()
    created_at: datetime = Field(sa_column=sa.Column(sa.DateTime(), nullable=False))
    expires_at: datetime = Field(sa_column=sa.Column(sa.DateTime(), nullable=False, index=True))
    used: bool = Field(default=False, nullable=False)
