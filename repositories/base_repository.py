"""
Base repository with the CRUD operations shared by profile and token storage.

Every write commits immediately; callers that need to recover from a
constraint violation roll the session back themselves.
"""

from typing import TypeVar, Generic, Optional, Type, Any
from sqlmodel import Session, SQLModel

T = TypeVar("T", bound=SQLModel)


class BaseRepository(Generic[T]):
    """
    Generic repository bound to one SQLModel table.

    Type Parameters:
        T: SQLModel entity type
    """

    def __init__(self, db_session: Session, model_class: Type[T]):
        self.db = db_session
        self.model_class = model_class

    def get_by_id(self, id: Any) -> Optional[T]:
        """
        Get entity by primary key.

        Args:
            id: Primary key value (profile uuid string or token string)

        Returns:
            Entity if found, None otherwise
        """
        return self.db.get(self.model_class, id)

    def create(self, entity: T) -> T:
        """
        Insert a new entity.

        Raises:
            sqlalchemy.exc.IntegrityError: unique constraint violated on commit;
                the session is left for the caller to roll back
        """
        return self._persist(entity)

    def update(self, entity: T) -> T:
        """Write back changes made to a loaded entity."""
        return self._persist(entity)

    def delete_by_id(self, id: Any) -> bool:
        """
        Delete entity by primary key.

        Returns:
            True if a row was deleted, False if none matched
        """
        entity = self.get_by_id(id)
        if entity is None:
            return False
        self.db.delete(entity)
        self.db.commit()
        return True

    def _persist(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity
