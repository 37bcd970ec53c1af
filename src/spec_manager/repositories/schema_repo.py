"""Repositories for schemas, categories and fields."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from spec_manager.db.models.schema import SchemaCategoryRow, SchemaFieldRow, SchemaRow
from spec_manager.repositories.base import BaseRepository


class SchemaRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SchemaRow)

    async def get_with_tree(self, schema_id: str) -> SchemaRow | None:
        """Load a schema with ordered categories and their ordered fields."""
        stmt = (
            select(SchemaRow)
            .where(SchemaRow.id == schema_id)
            .options(selectinload(SchemaRow.categories).selectinload(SchemaCategoryRow.fields))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()


class CategoryRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SchemaCategoryRow)

    async def delete_for_schema(self, schema_id: str) -> int:
        """Bulk-delete a schema's categories; fields go with them via FK cascade."""
        return await self.delete_by_field("schema_id", schema_id)


class FieldRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SchemaFieldRow)

    async def list_for_schema(self, schema_id: str) -> list[SchemaFieldRow]:
        """All fields of a schema in wizard order (category order, then field order)."""
        stmt = (
            select(SchemaFieldRow)
            .join(SchemaCategoryRow, SchemaFieldRow.category_id == SchemaCategoryRow.id)
            .where(SchemaCategoryRow.schema_id == schema_id)
            .order_by(SchemaCategoryRow.display_order, SchemaFieldRow.display_order)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
