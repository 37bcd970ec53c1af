"""Specification routes; every operation is scoped to the caller's own documents."""

from uuid import UUID

from fastapi import APIRouter

from spec_manager.dependencies import CurrentUser, DBSession
from spec_manager.models.common import ok
from spec_manager.models.specification import SaveSpecificationRequest, SpecificationCreate
from spec_manager.services import specification_service

router = APIRouter(prefix="/specifications", tags=["Specifications"])


@router.get("")
async def list_specifications(
    user: CurrentUser,
    db: DBSession,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    sort: str | None = None,
) -> dict:
    result = await specification_service.get_specifications(
        db, user["sub"], page=page, limit=limit, status=status, sort=sort
    )
    return ok(result)


@router.post("", status_code=201)
async def create_specification(
    user: CurrentUser,
    db: DBSession,
    body: SpecificationCreate | None = None,
) -> dict:
    schema_id = str(body.schema_id) if body and body.schema_id else None
    spec = await specification_service.create_specification(db, user["sub"], schema_id)
    return ok(spec)


@router.get("/{spec_id}")
async def get_specification(spec_id: UUID, user: CurrentUser, db: DBSession) -> dict:
    spec = await specification_service.get_specification_by_id(db, str(spec_id), user["sub"])
    return ok(spec)


@router.delete("/{spec_id}")
async def delete_specification(spec_id: UUID, user: CurrentUser, db: DBSession) -> dict:
    await specification_service.delete_specification(db, str(spec_id), user["sub"])
    return ok({"id": str(spec_id), "deleted": True})


@router.get("/{spec_id}/content")
async def get_specification_content(spec_id: UUID, user: CurrentUser, db: DBSession) -> dict:
    content = await specification_service.get_specification_content(db, str(spec_id), user["sub"])
    return ok(content)


@router.put("/{spec_id}")
async def save_specification(
    spec_id: UUID, body: SaveSpecificationRequest, user: CurrentUser, db: DBSession
) -> dict:
    """Save the full wizard form: content map and the four sub-entity arrays."""
    result = await specification_service.save_specification(db, str(spec_id), user["sub"], body)
    return ok(result)


@router.get("/{spec_id}/wizard")
async def get_wizard(spec_id: UUID, user: CurrentUser, db: DBSession) -> dict:
    wizard = await specification_service.get_wizard(db, str(spec_id), user["sub"])
    return ok(wizard)
