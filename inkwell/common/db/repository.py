"""
Record Store Module

This module provides the generic record store used by the services: a small
create / find_one / list contract and its SQLAlchemy implementation. Every
call is its own transaction; there are no multi-record units of work.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from inkwell.common.exceptions import ConflictError, DatabaseError, NotFoundError
from inkwell.common.logger import app_logger

logger = app_logger.getChild("db.repository")

T = TypeVar('T')


class RecordStore(Generic[T], ABC):
    """
    Abstract record store for one entity type.
    """

    def __init__(self, entity_type: str):
        """
        Args:
            entity_type: Human-readable entity name used in errors ("User", "Story", ...)
        """
        self.entity_type = entity_type

    @abstractmethod
    async def create(self, record: T) -> T:
        """
        Persist a new record.

        Returns:
            The record with its generated ID

        Raises:
            ConflictError: If a unique field is already taken
            DatabaseError: On any other store failure
        """
        pass

    @abstractmethod
    async def find_one(self, **criteria: Any) -> T:
        """
        Get the first record whose fields equal ``criteria``.

        Raises:
            NotFoundError: If no record matches
            DatabaseError: On store failure
        """
        pass

    @abstractmethod
    async def list(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        """List records in ID order."""
        pass


class SQLAlchemyRecordStore(RecordStore[T]):
    """
    Record store backed by one SQLAlchemy model and an async session.
    """

    def __init__(self, session: AsyncSession, model: Type[T], entity_type: Optional[str] = None):
        super().__init__(entity_type or model.__name__)
        self.session = session
        self.model = model

    async def create(self, record: T) -> T:
        self.session.add(record)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Conflict creating {self.entity_type}: {e.orig}")
            raise ConflictError(f"{self.entity_type} already exists", e) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to create {self.entity_type}: {e}")
            raise DatabaseError(f"could not create {self.entity_type}", e) from e
        return record

    async def find_one(self, **criteria: Any) -> T:
        statement = select(self.model).filter_by(**criteria).order_by(self.model.id).limit(1)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up {self.entity_type}: {e}")
            raise DatabaseError(f"could not read {self.entity_type}", e) from e

        record = result.scalars().first()
        if record is None:
            raise NotFoundError(self.entity_type, criteria)
        return record

    async def list(self, limit: Optional[int] = None, offset: int = 0) -> List[T]:
        statement = select(self.model).order_by(self.model.id).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        try:
            result = await self.session.execute(statement)
        except SQLAlchemyError as e:
            logger.error(f"Failed to list {self.entity_type}: {e}")
            raise DatabaseError(f"could not list {self.entity_type}", e) from e
        return list(result.scalars().all())
