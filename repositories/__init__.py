"""
Repositories module - Data Access Layer.

Provides repository classes for database operations following the Repository pattern.
Each repository handles CRUD operations for a specific domain entity.

Usage:
    from repositories import ProfileRepository, AccessTokenRepository

    # Initialize with a database session
    profile_repo = ProfileRepository(db_session)

    # Use repository methods
    profile = profile_repo.get_by_token(token)
    profiles = profile_repo.list_recent()
"""

from repositories.base_repository import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.access_token_repository import AccessTokenRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "AccessTokenRepository",
]
