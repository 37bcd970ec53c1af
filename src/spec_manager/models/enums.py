"""String enums shared by the ORM rows and the API models."""

from enum import StrEnum


class RoleName(StrEnum):
    ADMINISTRATOR = "ADMINISTRATOR"
    CREATOR = "CREATOR"


class DataType(StrEnum):
    TEXT = "TEXT"
    TEXTAREA = "TEXTAREA"
    DATE = "DATE"
    RADIO = "RADIO"
    CHECKBOX = "CHECKBOX"
    LIST = "LIST"


class SpecificationStatus(StrEnum):
    DRAFT = "DRAFT"
    REVIEW = "REVIEW"
    SAVED = "SAVED"


class ListTargetEntity(StrEnum):
    """Sub-entity tables a LIST field can feed."""

    DELIVERABLE = "Deliverable"
    CONTRACTOR_REQUIREMENT = "ContractorRequirement"
    BASIC_BUSINESS_REQUIREMENT = "BasicBusinessRequirement"
    BUSINESS_TASK = "BusinessTask"


# DataTypes whose values must be drawn from the field's options.
CHOICE_TYPES = frozenset({DataType.RADIO, DataType.CHECKBOX})

SORTABLE_FIELDS = ("updatedAt", "createdAt", "title", "version")
DEFAULT_SORT = "-updatedAt"
