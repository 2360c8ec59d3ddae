"""Shared persistence helpers for the user, blog and comment repositories."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from blogapp.errors.database import DatabaseConnectionError, DatabaseError, DuplicateEntryError

UNIQUE_VIOLATION_MARKERS = ("unique", "duplicate")


class BaseRepository[ModelT: SQLModel]:
    """
    Primary key lookups and guarded inserts over one table.

    Subclasses set ``model``. Writes flush but never commit; the request's
    session commits once the route returns.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        """Check for a row without loading it."""
        statement = select(1).where(self.model.id == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def delete_record(self, record: ModelT) -> None:
        await self.session.delete(record)
        await self.session.flush()

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Insert or update ``record`` and reload server defaults.

        Raises:
            DuplicateEntryError: A unique constraint was violated.
            DatabaseError: Any other integrity failure, such as a missing foreign key.
            DatabaseConnectionError: The statement could not be executed.
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            message = str(e.orig or e)
            if any(marker in message.lower() for marker in UNIQUE_VIOLATION_MARKERS):
                raise DuplicateEntryError(detail=message) from e
            raise DatabaseError(detail=f"Database integrity error: {message}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save {self.model.__name__}: {e}") from e
        return record
