# backend/taskmarket/repositories/base_repository.py
"""
Base Repository Pattern for the TaskMarket platform.

Provides the foundation for all repository classes with:
- Common CRUD operations
- Type safety with generics
- Transaction support (managed by services)
- Batch helpers used by search hydration

Repositories never commit. Services own transaction boundaries.
"""

import logging
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..core.exceptions import RepositoryException
from ..database.session_utils import get_dialect_name

# Type variable for generic model support
T = TypeVar("T")

logger = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """
    Concrete base repository implementation with common data access patterns.

    Attributes:
        db: SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: Session, model: Type[T]):
        """
        Initialize repository with database session and model.

        Args:
            db: SQLAlchemy session (managed by service layer)
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @property
    def dialect_name(self) -> str:
        return get_dialect_name(self.db)

    def get_by_id(self, id: int, load_relationships: bool = True) -> Optional[T]:
        """
        Retrieve an entity by its primary key.

        Implements eager loading for relationships when requested.
        """
        try:
            query = self.db.query(self.model).filter(self.model.id == id)
            if load_relationships:
                query = self._apply_eager_loading(query)
            return query.first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}")

    def create(self, **kwargs) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - transaction management is handled by service layer.
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.error(
                "Integrity error creating %s: %s", self.model.__name__, exc, exc_info=True
            )
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}")

    def update(self, id: int, **kwargs) -> Optional[T]:
        """
        Update an existing entity.

        Only updates provided fields, preserves others.
        """
        try:
            entity = self.get_by_id(id, load_relationships=False)
            if not entity:
                return None

            for key, value in kwargs.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)

            self.db.flush()
            return entity
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to update {self.model.__name__}: {str(e)}")

    def delete(self, id: int) -> bool:
        """
        Delete an entity by its primary key.

        Returns False if entity not found, raises exception for constraint violations.
        """
        try:
            entity = self.get_by_id(id, load_relationships=False)
            if not entity:
                return False

            self.db.delete(entity)
            self.db.flush()
            return True
        except IntegrityError as e:
            self.logger.error(
                f"Cannot delete {self.model.__name__} {id} due to constraints: {str(e)}"
            )
            raise RepositoryException(f"Cannot delete due to existing references: {str(e)}")
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to delete {self.model.__name__}: {str(e)}")

    def exists(self, **kwargs) -> bool:
        """Check if an entity exists with given criteria."""
        try:
            return self.db.query(self.model.id).filter_by(**kwargs).first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking existence: {str(e)}")
            raise RepositoryException(f"Failed to check existence: {str(e)}")

    def count(self, **kwargs) -> int:
        """Count entities matching given criteria."""
        try:
            return self.db.query(self.model).filter_by(**kwargs).count()
        except SQLAlchemyError as e:
            self.logger.error(f"Error counting records: {str(e)}")
            raise RepositoryException(f"Failed to count records: {str(e)}")

    def find_by(self, **kwargs) -> List[T]:
        """Find entities by exact-match criteria, ordered by id."""
        try:
            return self.db.query(self.model).filter_by(**kwargs).order_by(self.model.id).all()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding by criteria: {str(e)}")
            raise RepositoryException(f"Failed to find records: {str(e)}")

    def find_one_by(self, **kwargs) -> Optional[T]:
        """Find a single entity by exact-match criteria."""
        try:
            return self.db.query(self.model).filter_by(**kwargs).first()
        except SQLAlchemyError as e:
            self.logger.error(f"Error finding one by criteria: {str(e)}")
            raise RepositoryException(f"Failed to find record: {str(e)}")

    def find_by_parent_ids(
        self, column: Any, parent_ids: Iterable[int], *order_by: Any
    ) -> Dict[int, List[T]]:
        """
        Batch-load child rows for many parents with one ``IN`` query.

        Returns a mapping of parent id to its children, each list in
        ``order_by`` order. Parents without children are absent.
        """
        ids = list(parent_ids)
        if not ids:
            return {}
        query = self.db.query(self.model).filter(column.in_(ids))
        if order_by:
            query = query.order_by(*order_by)
        grouped: Dict[int, List[T]] = {}
        for row in self._execute_query(query):
            grouped.setdefault(getattr(row, column.key), []).append(row)
        return grouped

    def max_value(self, column: Any, **kwargs) -> Optional[Any]:
        """Return ``MAX(column)`` over rows matching the criteria."""
        query = self.db.query(func.max(column)).select_from(self.model).filter_by(**kwargs)
        return self._execute_scalar(query)

    # Protected helper methods for use by subclasses

    def _apply_eager_loading(self, query: Query) -> Query:
        """
        Apply eager loading to relationships.

        Override in subclasses to specify which relationships to load.
        """
        return query

    def _execute_query(self, query: Query) -> List[T]:
        """Execute query with error handling."""
        try:
            return query.all()
        except SQLAlchemyError as e:
            self.logger.error(f"Query execution error: {str(e)}")
            raise RepositoryException(f"Query failed: {str(e)}")

    def _execute_scalar(self, query: Query) -> Any:
        """Execute scalar query with error handling."""
        try:
            return query.scalar()
        except SQLAlchemyError as e:
            self.logger.error(f"Scalar query error: {str(e)}")
            raise RepositoryException(f"Scalar query failed: {str(e)}")


class SluggedRepository(BaseRepository[T]):
    """Repository for models carrying a unique ``slug`` column."""

    def get_by_slug(self, slug: str) -> Optional[T]:
        query = self.db.query(self.model).filter(self.model.slug == slug)
        return self._apply_eager_loading(query).first()

    def slug_taken(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """True when another row already owns ``slug``."""
        query = self.db.query(self.model.id).filter(self.model.slug == slug)
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return self._execute_scalar(query.limit(1)) is not None
