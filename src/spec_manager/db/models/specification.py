"""Specification documents, their EAV content and LIST sub-entities."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spec_manager.db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from spec_manager.db.models.user import UserRow


class SpecificationRow(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "specifications"

    author_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    schema_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schemas.id"), nullable=False, index=True
    )
    title: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="DRAFT", index=True)
    version: Mapped[str] = mapped_column(String(20), nullable=False, default="1.0")

    author: Mapped[UserRow] = relationship()
    content: Mapped[list["SpecificationContentRow"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    deliverables: Mapped[list["DeliverableRow"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    contractor_requirements: Mapped[list["ContractorRequirementRow"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    basic_business_requirements: Mapped[list["BasicBusinessRequirementRow"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )
    business_tasks: Mapped[list["BusinessTaskRow"]] = relationship(
        cascade="all, delete-orphan", passive_deletes=True
    )


class _SpecificationChild(UUIDPrimaryKeyMixin, TimestampMixin):
    specification_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("specifications.id", ondelete="CASCADE"), nullable=False, index=True
    )


class SpecificationContentRow(Base, _SpecificationChild):
    """One EAV value: (specification, field) → JSON-encoded value."""

    __tablename__ = "specification_content"

    field_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("schema_fields.id", ondelete="CASCADE"), nullable=False
    )
    value: Mapped[str] = mapped_column(Text, nullable=False)


class DeliverableRow(Base, _SpecificationChild):
    __tablename__ = "deliverables"

    name: Mapped[str] = mapped_column(String(500), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class ContractorRequirementRow(Base, _SpecificationChild):
    __tablename__ = "contractor_requirements"

    category: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class BasicBusinessRequirementRow(Base, _SpecificationChild):
    __tablename__ = "basic_business_requirements"

    category: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)


class BusinessTaskRow(Base, _SpecificationChild):
    __tablename__ = "business_tasks"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    detailed_spec: Mapped[str] = mapped_column(Text, nullable=False)
