"""
Generic repository over one mapped model.

Repositories never commit: the caller's session scope decides when the
transaction ends.
"""

from typing import Generic, TypeVar

from sqlalchemy import func, inspect, select
from sqlalchemy.orm import Session

from movie_tracker.database.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Row-level operations shared by every repository.

    Subclasses set ``model`` to the mapped class they manage.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        self._session = session

    def _order_column(self):
        """Primary key column, used as the default sort order."""
        return inspect(self.model).primary_key[0]

    def get_by_id(self, entity_id: int) -> ModelT | None:
        """Load one row by primary key, None when absent."""
        return self._session.get(self.model, entity_id)

    def get_all(self, limit: int | None = None, offset: int = 0) -> list[ModelT]:
        """Load rows ordered by primary key.

        Args:
            limit: Maximum number of rows, None for all of them.
            offset: Rows to skip.

        Returns:
            Rows in ascending key order.
        """
        stmt = select(self.model).order_by(self._order_column()).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._session.scalars(stmt))

    def count(self) -> int:
        """Number of rows in the table."""
        stmt = select(func.count()).select_from(self.model)
        return self._session.scalar(stmt) or 0

    def create(self, entity: ModelT) -> ModelT:
        """Add a row and flush so generated keys are populated.

        Raises:
            sqlalchemy.exc.IntegrityError: When a constraint rejects the row.
        """
        self._session.add(entity)
        self._session.flush()
        return entity

    def delete_by_id(self, entity_id: int) -> bool:
        """Delete one row by primary key.

        Returns:
            True if a row was deleted, False if none had that key.
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self._session.delete(entity)
        self._session.flush()
        return True
