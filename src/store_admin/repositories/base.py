from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.sql.expression import Executable

from store_admin.core.exceptions import ConflictError, DatabaseError
from store_admin.db import session_scope
import logging

T = TypeVar('T')

logger = logging.getLogger(__name__)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.
    Implements Repository Pattern for clean separation of data access logic.

    Each public call runs in its own session; reads are not grouped into a
    shared transaction.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def session(self, operation: str = "SELECT") -> Iterator[Session]:
        """Session context manager translating driver errors into API errors"""
        try:
            with session_scope(self.session_factory) as session:
                yield session
        except IntegrityError as e:
            logger.error(f"Integrity constraint violation ({operation}): {str(e)}")
            raise ConflictError("Data conflicts with an existing record")
        except SQLAlchemyError as e:
            logger.error(f"Database error ({operation}): {str(e)}")
            raise DatabaseError(f"{operation} failed: {str(e)}", operation)

    def fetch_all(self, statement: Executable) -> List[Any]:
        """Execute SELECT returning ORM entities or scalars"""
        with self.session() as session:
            return list(session.scalars(statement).all())

    def fetch_rows(self, statement: Executable) -> List[Any]:
        """Execute SELECT returning row tuples (multi-column selects)"""
        with self.session() as session:
            return list(session.execute(statement).all())

    def fetch_scalar(self, statement: Executable) -> Any:
        """Execute query returning single scalar value (COUNT, SUM, AVG)"""
        with self.session() as session:
            return session.execute(statement).scalar()

    def count_by_store(self, store_id: int, model: Optional[Type[Any]] = None) -> int:
        """Number of rows of this entity (or `model`) that belong to the store"""
        model = model or self.model
        statement = (
            select(func.count())
            .select_from(model)
            .where(model.store_id == store_id)
        )
        return int(self.fetch_scalar(statement) or 0)

    @property
    @abstractmethod
    def model(self) -> Type[T]:
        """ORM class for the entity"""

    def get_by_id(self, entity_id: int) -> Optional[T]:
        """Get entity by primary key, None when absent"""
        with self.session() as session:
            return session.get(self.model, entity_id)

