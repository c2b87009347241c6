"""
Base repository with common persistence operations.

Domain repositories add their own queries on top of these.
"""

from datetime import datetime
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlmodel import Session, SQLModel

T = TypeVar("T", bound=SQLModel)


class BaseRepository(Generic[T]):
    """
    Generic repository over one SQLModel table.

    Type Parameters:
        T: SQLModel entity type
    """

    def __init__(self, db_session: Session, model_class: Type[T]):
        """
        Args:
            db_session: SQLModel database session
            model_class: The SQLModel class this repository manages
        """
        self.db = db_session
        self.model_class = model_class

    def get_by_id(self, id: Any) -> Optional[T]:
        """Entity by primary key, or None."""
        return self.db.get(self.model_class, id)

    def create(self, entity: T) -> T:
        """
        Insert and commit an entity.

        Returns:
            The entity refreshed from the database
        """
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def create_many(self, entities: List[T]) -> List[T]:
        """Insert several entities in one transaction."""
        self.db.add_all(entities)
        self.db.commit()
        for entity in entities:
            self.db.refresh(entity)
        return entities

    def update(self, entity: T) -> T:
        """Persist changes on an attached entity, stamping updated_at if present."""
        if hasattr(entity, "updated_at"):
            entity.updated_at = datetime.utcnow()
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> bool:
        self.db.delete(entity)
        self.db.commit()
        return True
