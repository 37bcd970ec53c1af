"""Pydantic models for specifications, EAV content and sub-entities."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from spec_manager.models.common import CamelModel, Pagination
from spec_manager.models.enums import DataType, SpecificationStatus
from spec_manager.models.user import AuthorSummary

# Value of one non-LIST field: TEXT/TEXTAREA/DATE/RADIO → str, CHECKBOX → list[str].
FieldValue = str | list[str] | None


# ── Sub-entities ───────────────────────────────────────────────────────────────

class DeliverableIn(CamelModel):
    name: str = Field(min_length=1, max_length=500)
    quantity: int = Field(1, ge=1)
    description: str | None = None


class ContractorRequirementIn(CamelModel):
    category: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)


class BasicBusinessRequirementIn(CamelModel):
    category: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)


class BusinessTaskIn(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    detailed_spec: str = Field(min_length=1)


class DeliverableOut(DeliverableIn):
    id: str


class ContractorRequirementOut(ContractorRequirementIn):
    id: str


class BasicBusinessRequirementOut(BasicBusinessRequirementIn):
    id: str


class BusinessTaskOut(BusinessTaskIn):
    id: str


# ── Request models ─────────────────────────────────────────────────────────────

class SpecificationCreate(CamelModel):
    schema_id: UUID | None = None


class SaveSpecificationRequest(CamelModel):
    """Full wizard form: the content map plus the four sub-entity arrays."""

    content: dict[str, FieldValue]
    deliverables: list[DeliverableIn] = Field(default_factory=list)
    contractor_requirements: list[ContractorRequirementIn] = Field(default_factory=list)
    basic_business_requirements: list[BasicBusinessRequirementIn] = Field(default_factory=list)
    business_tasks: list[BusinessTaskIn] = Field(default_factory=list)


# ── Response models ────────────────────────────────────────────────────────────

class SpecificationListItem(CamelModel):
    id: str
    title: str | None
    status: SpecificationStatus
    version: str
    created_at: datetime
    updated_at: datetime


class SpecificationPage(CamelModel):
    items: list[SpecificationListItem]
    pagination: Pagination


class SpecificationOut(SpecificationListItem):
    author_id: str
    schema_id: str


class SpecificationDetail(SpecificationOut):
    author: AuthorSummary


class SpecificationContentOut(CamelModel):
    id: str
    title: str | None
    status: SpecificationStatus
    version: str
    schema_id: str
    content: dict[str, FieldValue]
    deliverables: list[DeliverableOut]
    contractor_requirements: list[ContractorRequirementOut]
    basic_business_requirements: list[BasicBusinessRequirementOut]
    business_tasks: list[BusinessTaskOut]


class SaveSpecificationResponse(CamelModel):
    id: str
    title: str | None
    status: SpecificationStatus
    version: str
    updated_at: datetime


# ── Wizard ─────────────────────────────────────────────────────────────────────

class FieldEditor(CamelModel):
    """How the wizard renders one field, merged with its saved value."""

    field_id: str
    field_name: str
    data_type: DataType
    editor: str
    is_required: bool
    options: list[str] | None = None
    placeholder_text: str | None = None
    list_target_entity: str | None = None
    sub_entity_key: str | None = None
    value: Any = None


class WizardStep(CamelModel):
    category_id: str
    name: str
    description: str | None
    step: int
    fields: list[FieldEditor]


class WizardOut(CamelModel):
    specification_id: str
    schema_id: str
    title: str | None
    version: str
    steps: list[WizardStep]
