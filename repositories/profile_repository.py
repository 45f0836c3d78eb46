"""
Profile repository for profile persistence.

Handles lookups by token and newest-first listing on top of `BaseRepository`.
"""

from typing import List, Optional
from sqlmodel import Session, select, func

from models.profile import Profile
from repositories.base_repository import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for managing submitted profiles."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Profile)

    def get_by_token(self, token: str) -> Optional[Profile]:
        """
        Find the profile submitted with a given access token.

        Args:
            token: Access token string

        Returns:
            Profile or None
        """
        if not token:
            return None
        query = select(Profile).where(Profile.token == token)
        return self.db.exec(query).first()

    def list_recent(self) -> List[Profile]:
        """All profiles ordered by submission time, most recent first."""
        query = select(Profile).order_by(Profile.submitted_at.desc(), Profile.id)
        return list(self.db.exec(query).all())

    def count(self) -> int:
        return self.db.exec(select(func.count(Profile.id))).one()
