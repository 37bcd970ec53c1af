"""Base repository with common CRUD operations."""

from typing import Any, TypeVar

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository:
    """Generic async repository for SQLAlchemy models.

    Repositories flush but never commit; the caller owns the transaction.
    """

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def get(self, row_id: str) -> T | None:
        return await self.session.get(self.model_class, row_id)

    async def create(self, **kwargs: Any) -> T:
        """Create and persist a new record."""
        row = self.model_class(**kwargs)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: T, **kwargs: Any) -> T:
        """Update an existing record."""
        for key, value in kwargs.items():
            setattr(row, key, value)
        await self.session.flush()
        return row

    async def delete(self, row: T) -> None:
        await self.session.delete(row)
        await self.session.flush()

    async def delete_by_field(self, field: str, value: Any) -> int:
        stmt = delete(self.model_class).where(getattr(self.model_class, field) == value)
        result = await self.session.execute(stmt)
        return result.rowcount or 0
