"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar, Type, List, Optional, Dict, Any

from sqlalchemy.orm import Session
import structlog

from recruitment_api.core.base import Base

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository class with common CRUD operations.

    Write methods commit on success and roll back before re-raising on
    failure, so callers can inspect the original ``IntegrityError``.
    """

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)
        return query

    def _newest_first(self, query):
        return query.order_by(self.model.created_at.desc(), self.model.id.desc())

    def create(self, db: Session, **kwargs) -> ModelType:
        """Create a new record.

        Args:
            db: Database session
            **kwargs: Model field values

        Returns:
            Created model instance
        """
        try:
            instance = self.model(**kwargs)
            db.add(instance)
            db.commit()
            db.refresh(instance)

            logger.debug("Record created", model=self.model.__name__, id=instance.id)
            return instance

        except Exception:
            db.rollback()
            raise

    def get_by_id(self, db: Session, id: int) -> Optional[ModelType]:
        """Get record by ID.

        Args:
            db: Database session
            id: Record ID

        Returns:
            Model instance if found, None otherwise
        """
        return db.query(self.model).filter(self.model.id == id).first()

    def get_all(self, db: Session, filters: Optional[Dict[str, Any]] = None) -> List[ModelType]:
        """Get every record, newest first.

        Args:
            db: Database session
            filters: Optional equality filters

        Returns:
            List of model instances
        """
        query = self._apply_filters(db.query(self.model), filters)
        return self._newest_first(query).all()

    def get_multi(
        self,
        db: Session,
        skip: int = 0,
        limit: int = 100,
        filters: Optional[Dict[str, Any]] = None
    ) -> List[ModelType]:
        """Get a page of records, newest first.

        Args:
            db: Database session
            skip: Number of records to skip
            limit: Maximum number of records to return
            filters: Optional filters to apply

        Returns:
            List of model instances
        """
        query = self._apply_filters(db.query(self.model), filters)
        return self._newest_first(query).offset(skip).limit(limit).all()

    def update(self, db: Session, instance: ModelType, **kwargs) -> ModelType:
        """Apply the given fields to a loaded record.

        Every key passed is written, including explicit ``None`` values, so
        callers control PATCH semantics by what they pass.

        Args:
            db: Database session
            instance: Loaded model instance
            **kwargs: Fields to update

        Returns:
            Updated model instance
        """
        try:
            for field, value in kwargs.items():
                if hasattr(instance, field):
                    setattr(instance, field, value)

            db.commit()
            db.refresh(instance)

            logger.debug("Record updated", model=self.model.__name__, id=instance.id)
            return instance

        except Exception:
            db.rollback()
            raise

    def delete(self, db: Session, instance: ModelType) -> None:
        """Physically delete a loaded record.

        Args:
            db: Database session
            instance: Loaded model instance
        """
        try:
            db.delete(instance)
            db.commit()

            logger.debug("Record deleted", model=self.model.__name__, id=instance.id)

        except Exception:
            db.rollback()
            raise

    def count(self, db: Session, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count records with optional filtering.

        Args:
            db: Database session
            filters: Optional filters to apply

        Returns:
            Number of records matching criteria
        """
        return self._apply_filters(db.query(self.model), filters).count()
