"""Repository for specifications, their EAV content and sub-entities."""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from spec_manager.db.models.specification import (
    BasicBusinessRequirementRow,
    BusinessTaskRow,
    ContractorRequirementRow,
    DeliverableRow,
    SpecificationContentRow,
    SpecificationRow,
)
from spec_manager.repositories.base import BaseRepository

# Every table whose rows hang off a specification and are rewritten on save.
CHILD_TABLES = (
    SpecificationContentRow,
    DeliverableRow,
    ContractorRequirementRow,
    BasicBusinessRequirementRow,
    BusinessTaskRow,
)

_SORT_COLUMNS = {
    "updatedAt": SpecificationRow.updated_at,
    "createdAt": SpecificationRow.created_at,
    "title": SpecificationRow.title,
    "version": SpecificationRow.version,
}


class SpecificationRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SpecificationRow)

    def _author_filter(self, author_id: str, status: str | None) -> list:
        clauses = [SpecificationRow.author_id == author_id]
        if status:
            clauses.append(SpecificationRow.status == status)
        return clauses

    async def list_for_author(
        self,
        author_id: str,
        status: str | None = None,
        sort_field: str = "updatedAt",
        descending: bool = True,
        limit: int = 10,
        offset: int = 0,
    ) -> list[SpecificationRow]:
        column = _SORT_COLUMNS[sort_field]
        order = column.desc() if descending else column.asc()
        stmt = (
            select(SpecificationRow)
            .where(*self._author_filter(author_id, status))
            .order_by(order, SpecificationRow.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_for_author(self, author_id: str, status: str | None = None) -> int:
        stmt = (
            select(func.count())
            .select_from(SpecificationRow)
            .where(*self._author_filter(author_id, status))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def get_with_author(self, specification_id: str) -> SpecificationRow | None:
        stmt = (
            select(SpecificationRow)
            .where(SpecificationRow.id == specification_id)
            .options(selectinload(SpecificationRow.author))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_content(self, specification_id: str) -> SpecificationRow | None:
        stmt = (
            select(SpecificationRow)
            .where(SpecificationRow.id == specification_id)
            .options(
                selectinload(SpecificationRow.content),
                selectinload(SpecificationRow.deliverables),
                selectinload(SpecificationRow.contractor_requirements),
                selectinload(SpecificationRow.basic_business_requirements),
                selectinload(SpecificationRow.business_tasks),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def clear_children(self, specification_id: str) -> None:
        """Remove all EAV values and sub-entity rows of a specification."""
        for table in CHILD_TABLES:
            await self.session.execute(
                delete(table).where(table.specification_id == specification_id)
            )

    async def add_children(self, rows: list) -> None:
        self.session.add_all(rows)
        await self.session.flush()
