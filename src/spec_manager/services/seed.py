"""Default roles, demo users and the default wizard schema."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.config import settings
from spec_manager.db.models.schema import SchemaCategoryRow, SchemaFieldRow, SchemaRow
from spec_manager.models.enums import DataType, ListTargetEntity, RoleName
from spec_manager.repositories.schema_repo import SchemaRepository
from spec_manager.repositories.user_repo import RoleRepository, UserRepository
from spec_manager.services.security import hash_password

logger = logging.getLogger(__name__)

DEFAULT_USERS = [
    {
        "email": "admin@example.com",
        "password": "Admin123!",
        "full_name": "Admin Test User",
        "roles": [RoleName.ADMINISTRATOR, RoleName.CREATOR],
    },
    {
        "email": "creator@example.com",
        "password": "Creator123!",
        "full_name": "Creator Test User",
        "roles": [RoleName.CREATOR],
    },
]

DEFAULT_SCHEMA_NAME = "Default schema"


def _field(name: str, data_type: DataType, required: bool = False, placeholder: str | None = None,
           options: list[str] | None = None, target: ListTargetEntity | None = None) -> dict:
    return {
        "field_name": name,
        "data_type": data_type.value,
        "is_required": required,
        "placeholder_text": placeholder,
        "options": options,
        "list_target_entity": target.value if target else None,
    }


# ─── wizard steps (category → fields), in display order ──────────────

DEFAULT_CATEGORIES = [
    {
        "name": "Step 1: Basic information",
        "description": "Enter the basic information of the specification",
        "fields": [
            _field("Title", DataType.TEXT, True, "Enter the specification title"),
            _field("Background", DataType.TEXTAREA, True, "Describe the background of the procurement"),
            _field("Purpose", DataType.TEXTAREA, True, "Describe the purpose of the procurement"),
        ],
    },
    {
        "name": "Step 2: Procurement type and scope",
        "description": "Select the procurement type and scope",
        "fields": [
            _field("Procurement type", DataType.RADIO, True,
                   options=["Development", "Maintenance and operation", "Consulting", "Other"]),
            _field("Procurement scope", DataType.CHECKBOX,
                   options=["Consulting", "Requirements definition support", "System design",
                            "Programming", "Testing", "Migration", "Training"]),
        ],
    },
    {
        "name": "Step 3: Delivery",
        "description": "Enter the deliverables and delivery conditions",
        "fields": [
            _field("Deliverables", DataType.LIST, placeholder="Add deliverables",
                   target=ListTargetEntity.DELIVERABLE),
            _field("Delivery deadline", DataType.DATE, True, "Select the delivery deadline"),
            _field("Delivery place", DataType.TEXT, placeholder="Enter the delivery place"),
            _field("Delivery contact", DataType.TEXT, placeholder="Enter the person in charge of delivery"),
        ],
    },
    {
        "name": "Step 4: Contractor requirements",
        "description": "Enter the requirements for the contractor",
        "fields": [
            _field("Contractor requirements", DataType.LIST, placeholder="Add contractor requirements",
                   target=ListTargetEntity.CONTRACTOR_REQUIREMENT),
            _field("Basic business requirements", DataType.LIST, placeholder="Add basic business requirements",
                   target=ListTargetEntity.BASIC_BUSINESS_REQUIREMENT),
        ],
    },
    {
        "name": "Step 5: Business task details",
        "description": "Enter the detailed specification of each business task",
        "fields": [
            _field("Business tasks", DataType.LIST, placeholder="Add business tasks",
                   target=ListTargetEntity.BUSINESS_TASK),
        ],
    },
    {
        "name": "Step 6: Review",
        "description": "Review the entered content",
        "fields": [],
    },
]


async def seed_default_categories(session: AsyncSession, schema_id: str) -> int:
    """Insert the default categories and fields under ``schema_id``.

    Returns the number of fields created.
    """
    created = 0
    for order, cat_def in enumerate(DEFAULT_CATEGORIES, start=1):
        category = SchemaCategoryRow(
            schema_id=schema_id,
            name=cat_def["name"],
            description=cat_def["description"],
            display_order=order,
        )
        session.add(category)
        await session.flush()
        for field_order, field_def in enumerate(cat_def["fields"], start=1):
            session.add(SchemaFieldRow(category_id=category.id, display_order=field_order, **field_def))
            created += 1
    await session.flush()
    return created


async def seed_database(session: AsyncSession) -> dict:
    """Seed roles, demo users and the default schema (idempotent).

    Returns counts of what was created; all zeros when already seeded.
    """
    counts = {"roles": 0, "users": 0, "schemas": 0, "fields": 0}

    role_repo = RoleRepository(session)
    roles = {}
    for role_name in RoleName:
        role = await role_repo.get_by_name(role_name.value)
        if role is None:
            role = await role_repo.create(role_name=role_name.value)
            counts["roles"] += 1
        roles[role_name] = role

    user_repo = UserRepository(session)
    for user_def in DEFAULT_USERS:
        user = await user_repo.get_by_email(user_def["email"])
        if user is None:
            user = await user_repo.create_user(
                email=user_def["email"],
                password_hash=hash_password(user_def["password"]),
                full_name=user_def["full_name"],
            )
            counts["users"] += 1
        for role_name in user_def["roles"]:
            await user_repo.assign_role(user, roles[role_name])

    schema_repo = SchemaRepository(session)
    schema = await schema_repo.get(settings.default_schema_id)
    if schema is None:
        schema = SchemaRow(id=settings.default_schema_id, name=DEFAULT_SCHEMA_NAME, is_default=True)
        session.add(schema)
        await session.flush()
        counts["schemas"] += 1
        counts["fields"] = await seed_default_categories(session, schema.id)

    if any(counts.values()):
        logger.info("Seeded database: %s", counts)
    return counts
