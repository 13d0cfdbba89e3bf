from typing import Generic, List, Optional, Sequence, Type, TypeVar, Union
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.database import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class SQLAlchemyStore(Generic[ModelT]):
    """
    Generic store over one mapped entity type.

    Provides the four persistence primitives the services rely on:
    - get: fetch by primary key
    - find_all: filter / order / eager-load
    - save: upsert one entity or a batch in a single commit
    - delete: remove by primary key (ORM cascades apply)
    """

    model: Type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: int, load: Sequence = ()) -> Optional[ModelT]:
        """Get an entity by primary key, or None."""
        query = self.db.query(self.model)
        if load:
            query = query.options(*load)
        return query.filter(self.model.id == entity_id).first()

    def find_all(self, *criteria, order_by: Sequence = (), load: Sequence = ()) -> List[ModelT]:
        """
        Get all entities matching every criterion.

        Args:
            criteria: SQLAlchemy filter expressions (ANDed)
            order_by: Columns to order by
            load: Loader options (e.g. joinedload of a relationship)
        """
        query = self.db.query(self.model)
        if load:
            query = query.options(*load)
        if criteria:
            query = query.filter(*criteria)
        if order_by:
            query = query.order_by(*order_by)
        return query.all()

    def save(self, entities: Union[ModelT, List[ModelT]]) -> Union[ModelT, List[ModelT]]:
        """
        Persist one entity or a batch of entities in a single commit.

        Returns the same shape that was passed in, refreshed from the database.
        """
        batch = entities if isinstance(entities, list) else [entities]
        try:
            self.db.add_all(batch)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error saving {self.model.__name__}: {e}")
            raise

        for entity in batch:
            self.db.refresh(entity)
        return entities

    def delete(self, entity_id: int) -> int:
        """
        Delete an entity by primary key.

        Returns:
            Number of rows deleted (0 or 1)
        """
        entity = self.db.query(self.model).filter(self.model.id == entity_id).first()
        if entity is None:
            return 0

        try:
            self.db.delete(entity)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error deleting {self.model.__name__} #{entity_id}: {e}")
            raise
        return 1
