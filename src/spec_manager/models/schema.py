"""Pydantic models for the dynamic form schema."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BeforeValidator, Field

from spec_manager.models.common import CamelModel
from spec_manager.models.enums import DataType, ListTargetEntity


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


BlankableText = Annotated[str | None, BeforeValidator(_blank_to_none)]
BlankableTarget = Annotated[ListTargetEntity | None, BeforeValidator(_blank_to_none)]


# ── Request models ─────────────────────────────────────────────────────────────

class CategoryCreate(CamelModel):
    schema_id: UUID
    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    display_order: int = Field(ge=1)


class CategoryUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    display_order: int | None = Field(None, ge=1)


class FieldCreate(CamelModel):
    category_id: UUID
    field_name: str = Field(min_length=1, max_length=200)
    data_type: DataType
    is_required: bool = False
    options: list[str] | None = None
    list_target_entity: BlankableTarget = None
    placeholder_text: BlankableText = None
    display_order: int = Field(ge=1)


class FieldUpdate(CamelModel):
    """Partial update; ``model_fields_set`` tells supplied keys from omitted ones."""

    field_name: str | None = Field(None, min_length=1, max_length=200)
    data_type: DataType | None = None
    is_required: bool | None = None
    options: list[str] | None = None
    list_target_entity: BlankableTarget = None
    placeholder_text: BlankableText = None
    display_order: int | None = Field(None, ge=1)


class SchemaResetRequest(CamelModel):
    schema_id: UUID
    restore_defaults: bool = False


# ── Response models ────────────────────────────────────────────────────────────

class FieldOut(CamelModel):
    id: str
    category_id: str
    field_name: str
    data_type: DataType
    is_required: bool
    options: list[str] | None
    list_target_entity: str | None
    placeholder_text: str | None
    display_order: int


class CategoryOut(CamelModel):
    id: str
    schema_id: str
    name: str
    description: str | None
    display_order: int


class CategoryTreeOut(CategoryOut):
    fields: list[FieldOut]


class SchemaOut(CamelModel):
    id: str
    name: str
    is_default: bool
    created_at: datetime
    updated_at: datetime
    categories: list[CategoryTreeOut]
