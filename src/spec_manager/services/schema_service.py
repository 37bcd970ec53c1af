"""Admin operations over a schema's categories and fields."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.db.models.schema import SchemaCategoryRow, SchemaFieldRow, SchemaRow
from spec_manager.errors.exceptions import NotFoundError, ValidationError
from spec_manager.models.enums import CHOICE_TYPES, DataType
from spec_manager.models.schema import CategoryCreate, CategoryUpdate, FieldCreate, FieldUpdate
from spec_manager.repositories.schema_repo import CategoryRepository, FieldRepository, SchemaRepository
from spec_manager.services.seed import seed_default_categories

logger = logging.getLogger(__name__)

OPTIONS_REQUIRED = "Options are required for RADIO/CHECKBOX data type"
LIST_TARGET_REQUIRED = "listTargetEntity is required for LIST data type"


def check_field_invariants(data_type: DataType, options: list[str] | None, list_target_entity: str | None) -> None:
    """Enforce the datatype-conditional requirements of a field.

    Raises:
        ValidationError: RADIO/CHECKBOX without options, LIST without a target.
    """
    if data_type in CHOICE_TYPES and not options:
        raise ValidationError(OPTIONS_REQUIRED)
    if data_type == DataType.LIST and not list_target_entity:
        raise ValidationError(LIST_TARGET_REQUIRED)


async def _get_schema(session: AsyncSession, schema_id: str) -> SchemaRow:
    schema = await SchemaRepository(session).get_with_tree(schema_id)
    if schema is None:
        raise NotFoundError("Schema", schema_id)
    return schema


async def get_schema_by_id(session: AsyncSession, schema_id: str) -> SchemaRow:
    """Schema with its categories and fields, both ordered by display order."""
    schema = await _get_schema(session, schema_id)
    logger.debug("Schema %s retrieved (%d categories)", schema_id, len(schema.categories))
    return schema


# ── Categories ─────────────────────────────────────────────────────────────────

async def create_category(session: AsyncSession, data: CategoryCreate) -> SchemaCategoryRow:
    schema_id = str(data.schema_id)
    if await SchemaRepository(session).get(schema_id) is None:
        raise NotFoundError("Schema", schema_id)

    category = await CategoryRepository(session).create(
        schema_id=schema_id,
        name=data.name,
        description=data.description,
        display_order=data.display_order,
    )
    await session.commit()
    logger.info("Category %s created in schema %s", category.id, schema_id)
    return category


async def _get_category(session: AsyncSession, category_id: str) -> SchemaCategoryRow:
    category = await CategoryRepository(session).get(category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


async def update_category(session: AsyncSession, category_id: str, data: CategoryUpdate) -> SchemaCategoryRow:
    category = await _get_category(session, category_id)
    changes = data.model_dump(exclude_unset=True)
    # name and display_order are NOT NULL; an explicit null means "leave as is"
    changes = {k: v for k, v in changes.items() if v is not None or k == "description"}
    await CategoryRepository(session).update(category, **changes)
    await session.commit()
    logger.info("Category %s updated (%s)", category_id, ", ".join(sorted(changes)) or "no changes")
    return category


async def delete_category(session: AsyncSession, category_id: str) -> None:
    """Delete a category; its fields are removed by the FK cascade."""
    category = await _get_category(session, category_id)
    await CategoryRepository(session).delete(category)
    await session.commit()
    logger.info("Category %s deleted", category_id)


# ── Fields ─────────────────────────────────────────────────────────────────────

async def create_field(session: AsyncSession, data: FieldCreate) -> SchemaFieldRow:
    category_id = str(data.category_id)
    await _get_category(session, category_id)

    target = data.list_target_entity.value if data.list_target_entity else None
    check_field_invariants(data.data_type, data.options, target)

    field = await FieldRepository(session).create(
        category_id=category_id,
        field_name=data.field_name,
        data_type=data.data_type.value,
        is_required=data.is_required,
        options=data.options if data.data_type in CHOICE_TYPES else data.options or None,
        list_target_entity=target,
        placeholder_text=data.placeholder_text,
        display_order=data.display_order,
    )
    await session.commit()
    logger.info("Field %s (%s) created in category %s", field.id, field.data_type, category_id)
    return field


async def _get_field(session: AsyncSession, field_id: str) -> SchemaFieldRow:
    field = await FieldRepository(session).get(field_id)
    if field is None:
        raise NotFoundError("Field", field_id)
    return field


async def update_field(session: AsyncSession, field_id: str, data: FieldUpdate) -> SchemaFieldRow:
    """Apply a partial update.

    Omitted ``options`` keep the stored options, so a RADIO/CHECKBOX field
    can be renamed or reordered without resending them. Supplying empty or
    null options for a RADIO/CHECKBOX field is rejected like on create.
    Changing ``dataType`` clears ``options`` and ``listTargetEntity`` when
    the new type does not use them.
    """
    field = await _get_field(session, field_id)
    supplied = data.model_fields_set

    data_type = data.data_type or DataType(field.data_type)
    if data_type in CHOICE_TYPES and "options" in supplied and not data.options:
        raise ValidationError(OPTIONS_REQUIRED)
    if data_type in CHOICE_TYPES and "options" not in supplied and not field.options:
        raise ValidationError(OPTIONS_REQUIRED)

    if "list_target_entity" in supplied:
        target = data.list_target_entity.value if data.list_target_entity else None
    else:
        target = field.list_target_entity
    if data_type == DataType.LIST and not target:
        raise ValidationError(LIST_TARGET_REQUIRED)

    changes: dict = {}
    if data.field_name is not None:
        changes["field_name"] = data.field_name
    if data.data_type is not None:
        changes["data_type"] = data.data_type.value
    if data.is_required is not None:
        changes["is_required"] = data.is_required
    if data.options is not None:
        changes["options"] = data.options
    if "list_target_entity" in supplied:
        changes["list_target_entity"] = target
    if "placeholder_text" in supplied:
        changes["placeholder_text"] = data.placeholder_text
    if data.display_order is not None:
        changes["display_order"] = data.display_order

    if data.data_type is not None:
        if data_type not in CHOICE_TYPES:
            changes["options"] = None
        if data_type != DataType.LIST:
            changes["list_target_entity"] = None

    await FieldRepository(session).update(field, **changes)
    await session.commit()
    logger.info("Field %s updated (%s)", field_id, ", ".join(sorted(changes)) or "no changes")
    return field


async def delete_field(session: AsyncSession, field_id: str) -> None:
    field = await _get_field(session, field_id)
    await FieldRepository(session).delete(field)
    await session.commit()
    logger.info("Field %s deleted", field_id)


# ── Reset ──────────────────────────────────────────────────────────────────────

async def reset_schema_to_default(
    session: AsyncSession, schema_id: str, restore_defaults: bool = False
) -> SchemaRow:
    """Delete every category (and field) of a schema in one transaction.

    Without ``restore_defaults`` the schema is left empty: the default
    categories are not reinserted. With it, the seeded default wizard steps
    are written back inside the same transaction.
    """
    if await SchemaRepository(session).get(schema_id) is None:
        raise NotFoundError("Schema", schema_id)

    try:
        deleted = await CategoryRepository(session).delete_for_schema(schema_id)
        restored = 0
        if restore_defaults:
            restored = await seed_default_categories(session, schema_id)
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Schema %s reset rolled back", schema_id)
        raise

    if restore_defaults:
        logger.info("Schema %s reset: %d categories deleted, %d default fields restored",
                    schema_id, deleted, restored)
    else:
        logger.warning(
            "Schema %s reset: %d categories deleted, defaults NOT restored (pass restoreDefaults to re-seed)",
            schema_id, deleted,
        )
    return await _get_schema(session, schema_id)
