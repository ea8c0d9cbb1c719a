"""
Base repository with standardized CRUD operations, transaction management, and error handling.

Provides the foundation for all domain repositories.
"""

from contextlib import contextmanager
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hotelbook.core.exceptions import (
    DatabaseError,
    ResourceNotFoundError,
    handle_database_exception,
)
from hotelbook.core.logging import get_logger
from hotelbook.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Subclasses set ``not_found_error`` to the exception raised by ``get_by_id``.
    """

    not_found_error: Type[ResourceNotFoundError] = ResourceNotFoundError

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Transaction Management ====================

    @contextmanager
    def transaction(self):
        """
        Transaction context manager with automatic rollback.

        Usage:
            with repository.transaction():
                repository.create(entity, commit=False)

        Database errors are translated into application exceptions.
        """
        try:
            yield self.db
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Transaction rollback: {str(e)}")
            raise handle_database_exception(e) from e
        except Exception:
            self.db.rollback()
            raise

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """
        Persist a new entity.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Created entity

        Raises:
            DuplicateEntryError: If a unique constraint rejects the row
            DatabaseError: If the insert fails for another reason
        """
        try:
            self.db.add(entity)

            if commit:
                self.db.commit()
                self.db.refresh(entity)
            else:
                self.db.flush()

            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity

        except IntegrityError as e:
            self.db.rollback()
            raise handle_database_exception(e) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError(f"Create failed: {str(e)}", operation="create",
                                table=self.model.__tablename__) from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Find by ID failed: {str(e)}", operation="select",
                                table=self.model.__tablename__) from e

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise the repository's not-found error.
        """
        entity = self.find_by_id(id)
        if entity is None:
            raise self.not_found_error(id)
        return entity

    def find_all(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        query = select(self.model).offset(skip).limit(limit)
        return list(self.db.execute(query).scalars().all())

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        order_by: Optional[List[str]] = None,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs (lists become IN)
            order_by: Fields to order by (prefix with - for desc)
            limit: Maximum number of records

        Returns:
            List of matching entities
        """
        query = select(self.model)

        for key, value in criteria.items():
            if not hasattr(self.model, key):
                continue
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set)):
                query = query.where(column.in_(list(value)))
            else:
                query = query.where(column == value)

        for field in order_by or []:
            if field.startswith('-'):
                query = query.order_by(getattr(self.model, field[1:]).desc())
            else:
                query = query.order_by(getattr(self.model, field))

        if limit is not None:
            query = query.limit(limit)

        try:
            return list(self.db.execute(query).scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Find by criteria failed: {str(e)}", operation="select",
                                table=self.model.__tablename__) from e

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        query = select(func.count()).select_from(self.model)
        for key, value in (criteria or {}).items():
            query = query.where(getattr(self.model, key) == value)
        return self.db.execute(query).scalar_one()

    def exists(self, id: str) -> bool:
        return self.find_by_id(id) is not None
