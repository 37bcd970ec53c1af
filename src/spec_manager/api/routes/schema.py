"""Schema administration routes (ADMINISTRATOR only)."""

from uuid import UUID

from fastapi import APIRouter

from spec_manager.dependencies import DBSession, RequireAdmin
from spec_manager.models.common import ok
from spec_manager.models.schema import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    FieldCreate,
    FieldOut,
    FieldUpdate,
    SchemaOut,
    SchemaResetRequest,
)
from spec_manager.services import schema_service

router = APIRouter(prefix="/schema", tags=["Schema"], dependencies=[RequireAdmin])


@router.get("/{schema_id}")
async def get_schema(schema_id: UUID, db: DBSession) -> dict:
    schema = await schema_service.get_schema_by_id(db, str(schema_id))
    return ok(SchemaOut.model_validate(schema))


@router.post("/reset")
async def reset_schema(body: SchemaResetRequest, db: DBSession) -> dict:
    """Delete all categories of a schema; ``restoreDefaults`` re-seeds the default steps."""
    schema = await schema_service.reset_schema_to_default(db, str(body.schema_id), body.restore_defaults)
    return ok(SchemaOut.model_validate(schema))


# ── Categories ─────────────────────────────────────────────────────────────────

@router.post("/categories", status_code=201)
async def create_category(body: CategoryCreate, db: DBSession) -> dict:
    category = await schema_service.create_category(db, body)
    return ok(CategoryOut.model_validate(category))


@router.put("/categories/{category_id}")
async def update_category(category_id: UUID, body: CategoryUpdate, db: DBSession) -> dict:
    category = await schema_service.update_category(db, str(category_id), body)
    return ok(CategoryOut.model_validate(category))


@router.delete("/categories/{category_id}")
async def delete_category(category_id: UUID, db: DBSession) -> dict:
    await schema_service.delete_category(db, str(category_id))
    return ok({"id": str(category_id), "deleted": True})


# ── Fields ─────────────────────────────────────────────────────────────────────

@router.post("/fields", status_code=201)
async def create_field(body: FieldCreate, db: DBSession) -> dict:
    field = await schema_service.create_field(db, body)
    return ok(FieldOut.model_validate(field))


@router.put("/fields/{field_id}")
async def update_field(field_id: UUID, body: FieldUpdate, db: DBSession) -> dict:
    field = await schema_service.update_field(db, str(field_id), body)
    return ok(FieldOut.model_validate(field))


@router.delete("/fields/{field_id}")
async def delete_field(field_id: UUID, db: DBSession) -> dict:
    await schema_service.delete_field(db, str(field_id))
    return ok({"id": str(field_id), "deleted": True})
