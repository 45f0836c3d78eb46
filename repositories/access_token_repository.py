from typing import Optional

from sqlmodel import Session, select

from models.access_token import AccessToken
from repositories.base_repository import BaseRepository


class AccessTokenRepository(BaseRepository[AccessToken]):
    """Data access helpers for persisted access tokens."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, AccessToken)

    def get_by_token(self, token: str) -> Optional[AccessToken]:
        """Fetch a token row by its value."""
        return self.db.exec(
            select(AccessToken).where(AccessToken.token == token)
        ).first()

    def save(self, access_token: AccessToken) -> AccessToken:
        """Insert or replace a token row."""
        merged = self.db.merge(access_token)
        self.db.commit()
        self.db.refresh(merged)
        return merged
