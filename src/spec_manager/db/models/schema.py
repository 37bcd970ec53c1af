"""Dynamic form schema tables: schema → categories → fields."""

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spec_manager.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class SchemaRow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "schemas"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    categories: Mapped[list["SchemaCategoryRow"]] = relationship(
        back_populates="schema",
        order_by="SchemaCategoryRow.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SchemaCategoryRow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "schema_categories"

    schema_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schemas.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)

    schema: Mapped[SchemaRow] = relationship(back_populates="categories")
    fields: Mapped[list["SchemaFieldRow"]] = relationship(
        back_populates="category",
        order_by="SchemaFieldRow.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class SchemaFieldRow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "schema_fields"

    category_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schema_categories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    field_name: Mapped[str] = mapped_column(String(200), nullable=False)
    data_type: Mapped[str] = mapped_column(String(20), nullable=False)
    is_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    options: Mapped[list | None] = mapped_column(JSON, nullable=True)
    list_target_entity: Mapped[str | None] = mapped_column(String(100), nullable=True)
    placeholder_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)

    category: Mapped[SchemaCategoryRow] = relationship(back_populates="fields")
