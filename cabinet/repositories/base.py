"""Base repository with the shared query shapes.

Every repository issues exactly three kinds of statement: fetch a single
row, check that a row exists, and run a mutating statement that reports how
many rows it touched. They live here so subclasses only build the queries.

Reads select named columns rather than ORM entities, so a record is always
built from what the database holds right now and never from a stale
identity-map object.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from ..database import Base

ModelT = TypeVar("ModelT", bound=Base)


def parent_is(column, parent: Optional[int]):
    """``column IS NULL`` for the root sentinel, ``column = parent`` otherwise."""
    if parent is None:
        return column.is_(None)
    return column == parent


class BaseRepository(Generic[ModelT]):
    """Shared repository logic for SQLAlchemy models.

    Class variables to set in subclasses:
        model_class:   The SQLAlchemy model (e.g., Directory)
        resource_name: Name used in NotFoundError messages
    """

    model_class: Type[ModelT]
    resource_name: str

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self) -> Query:
        return self.db.query(self.model_class)

    def count(self) -> int:
        """Number of rows in the table."""
        return self._base_query().count()

    def _id_exists(self, entity_id: Optional[int]) -> bool:
        if entity_id is None:
            return False
        return self._exists(self.db.query(self.model_class.id).filter(self.model_class.id == entity_id))

    # ------------------------------------------------------------------
    # Query shapes
    # ------------------------------------------------------------------

    def _fetch_one(self, query: Query) -> Optional[Any]:
        """First row of *query*, or None."""
        return query.first()

    def _exists(self, query: Query) -> bool:
        """True if *query* matches at least one row."""
        return bool(self.db.query(query.exists()).scalar())

    def _execute(self, statement) -> int:
        """Run an UPDATE/DELETE statement and return the affected row count."""
        result = self.db.execute(statement.execution_options(synchronize_session=False))
        return result.rowcount
