"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from spec_manager.db.models.user import RoleRow, UserRoleRow, UserRow
from spec_manager.db.models.schema import SchemaCategoryRow, SchemaFieldRow, SchemaRow
from spec_manager.db.models.specification import (
    BasicBusinessRequirementRow,
    BusinessTaskRow,
    ContractorRequirementRow,
    DeliverableRow,
    SpecificationContentRow,
    SpecificationRow,
)

__all__ = [
    "RoleRow",
    "UserRow",
    "UserRoleRow",
    "SchemaRow",
    "SchemaCategoryRow",
    "SchemaFieldRow",
    "SpecificationRow",
    "SpecificationContentRow",
    "DeliverableRow",
    "ContractorRequirementRow",
    "BasicBusinessRequirementRow",
    "BusinessTaskRow",
]
