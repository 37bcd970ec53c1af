"""Specification documents owned by the calling user."""

import logging

from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from spec_manager.config import settings
from spec_manager.db.models.specification import SpecificationContentRow, SpecificationRow
from spec_manager.errors.exceptions import AuthorizationError, NotFoundError, ValidationError
from spec_manager.models.common import PageParams
from spec_manager.models.enums import DEFAULT_SORT, SORTABLE_FIELDS, DataType, SpecificationStatus
from spec_manager.models.specification import (
    BasicBusinessRequirementOut,
    BusinessTaskOut,
    ContractorRequirementOut,
    DeliverableOut,
    FieldEditor,
    SaveSpecificationRequest,
    SaveSpecificationResponse,
    SpecificationContentOut,
    SpecificationDetail,
    SpecificationListItem,
    SpecificationOut,
    SpecificationPage,
    WizardOut,
    WizardStep,
)
from spec_manager.repositories.schema_repo import FieldRepository, SchemaRepository
from spec_manager.repositories.specification_repo import SpecificationRepository
from spec_manager.services.content_model import (
    EDITORS,
    SUB_ENTITIES,
    decode_value,
    derive_title,
    encode_value,
    next_version,
    sub_entity_key,
    validate_content,
)

logger = logging.getLogger(__name__)


def parse_sort(sort: str | None) -> tuple[str, bool]:
    """Split ``-field`` into (field, descending); unknown fields fall back to updatedAt."""
    sort = (sort or DEFAULT_SORT).strip()
    descending = sort.startswith("-")
    sort_field = sort.lstrip("-+")
    if sort_field not in SORTABLE_FIELDS:
        return "updatedAt", descending
    return sort_field, descending


def parse_status(status: str | None) -> SpecificationStatus | None:
    if not status:
        return None
    try:
        return SpecificationStatus(status)
    except ValueError as exc:
        allowed = [s.value for s in SpecificationStatus]
        raise ValidationError(f"Invalid status '{status}'", {"allowed": allowed}) from exc


async def _get_owned(session: AsyncSession, specification_id: str, user_id: str, *, with_author: bool = False,
                     with_content: bool = False) -> SpecificationRow:
    """Load a specification, distinguishing absent (404) from not owned (403)."""
    repo = SpecificationRepository(session)
    if with_content:
        spec = await repo.get_with_content(specification_id)
    elif with_author:
        spec = await repo.get_with_author(specification_id)
    else:
        spec = await repo.get(specification_id)
    if spec is None:
        raise NotFoundError("Specification", specification_id)
    if spec.author_id != user_id:
        logger.warning("User %s denied access to specification %s", user_id, specification_id)
        raise AuthorizationError("Access denied")
    return spec


async def get_specifications(
    session: AsyncSession,
    user_id: str,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
    sort: str | None = None,
) -> SpecificationPage:
    params = PageParams.clamp(page, limit)
    status_filter = parse_status(status)
    sort_field, descending = parse_sort(sort)

    repo = SpecificationRepository(session)
    status_value = status_filter.value if status_filter else None
    rows = await repo.list_for_author(
        user_id,
        status=status_value,
        sort_field=sort_field,
        descending=descending,
        limit=params.limit,
        offset=params.offset,
    )
    total = await repo.count_for_author(user_id, status=status_value)
    return SpecificationPage(
        items=[SpecificationListItem.model_validate(row) for row in rows],
        pagination=params.paginate(total),
    )


async def create_specification(session: AsyncSession, user_id: str, schema_id: str | None = None) -> SpecificationOut:
    schema_id = schema_id or settings.default_schema_id
    if await SchemaRepository(session).get(schema_id) is None:
        raise NotFoundError("Schema", schema_id)

    spec = await SpecificationRepository(session).create(
        author_id=user_id,
        schema_id=schema_id,
        status=SpecificationStatus.DRAFT.value,
        version="1.0",
    )
    await session.commit()
    logger.info("Specification %s created by user %s (schema %s)", spec.id, user_id, schema_id)
    return SpecificationOut.model_validate(spec)


async def get_specification_by_id(session: AsyncSession, specification_id: str, user_id: str) -> SpecificationDetail:
    spec = await _get_owned(session, specification_id, user_id, with_author=True)
    return SpecificationDetail.model_validate(spec)


async def delete_specification(session: AsyncSession, specification_id: str, user_id: str) -> None:
    """Delete a specification; content and sub-entities go with it."""
    spec = await _get_owned(session, specification_id, user_id)
    await SpecificationRepository(session).delete(spec)
    await session.commit()
    logger.info("Specification %s deleted by user %s", specification_id, user_id)


def _content_map(spec: SpecificationRow) -> dict:
    return {row.field_id: decode_value(row.value) for row in spec.content}


def _content_out(spec: SpecificationRow) -> SpecificationContentOut:
    return SpecificationContentOut(
        id=spec.id,
        title=spec.title,
        status=spec.status,
        version=spec.version,
        schema_id=spec.schema_id,
        content=_content_map(spec),
        deliverables=[DeliverableOut.model_validate(r) for r in spec.deliverables],
        contractor_requirements=[ContractorRequirementOut.model_validate(r) for r in spec.contractor_requirements],
        basic_business_requirements=[
            BasicBusinessRequirementOut.model_validate(r) for r in spec.basic_business_requirements
        ],
        business_tasks=[BusinessTaskOut.model_validate(r) for r in spec.business_tasks],
    )


async def get_specification_content(
    session: AsyncSession, specification_id: str, user_id: str
) -> SpecificationContentOut:
    spec = await _get_owned(session, specification_id, user_id, with_content=True)
    return _content_out(spec)


async def save_specification(
    session: AsyncSession, specification_id: str, user_id: str, payload: SaveSpecificationRequest
) -> SaveSpecificationResponse:
    """Replace the whole content of a specification in one transaction.

    All EAV values and all sub-entity rows are rewritten from the payload,
    the minor version is bumped and the status stays DRAFT. The title
    follows the first TEXT field holding a value.
    """
    spec = await _get_owned(session, specification_id, user_id)
    fields = await FieldRepository(session).list_for_schema(spec.schema_id)
    content = validate_content(fields, payload.content)

    repo = SpecificationRepository(session)
    try:
        await repo.clear_children(spec.id)

        rows: list = [
            SpecificationContentRow(specification_id=spec.id, field_id=field_id, value=encode_value(value))
            for field_id, value in content.items()
            if value is not None
        ]
        for sub in SUB_ENTITIES.values():
            for item in getattr(payload, sub.payload_key):
                rows.append(sub.row_class(specification_id=spec.id, **item.model_dump()))
        await repo.add_children(rows)

        await repo.update(
            spec,
            title=derive_title(fields, content) or spec.title,
            version=next_version(spec.version),
            status=SpecificationStatus.DRAFT.value,
        )
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Saving specification %s rolled back", specification_id)
        raise

    await session.refresh(spec)
    logger.info("Specification %s saved by user %s (version %s, %d rows written)",
                spec.id, user_id, spec.version, len(rows))
    return SaveSpecificationResponse.model_validate(spec)


async def get_wizard(session: AsyncSession, specification_id: str, user_id: str) -> WizardOut:
    """Wizard steps of the specification's schema merged with its saved content."""
    spec = await _get_owned(session, specification_id, user_id, with_content=True)
    schema = await SchemaRepository(session).get_with_tree(spec.schema_id)
    if schema is None:
        raise NotFoundError("Schema", spec.schema_id)

    saved = _content_out(spec)
    values = saved.content
    steps = []
    for step, category in enumerate(schema.categories, start=1):
        editors = []
        for field in category.fields:
            key = sub_entity_key(field)
            if key is not None:
                value = [row.model_dump(by_alias=True) for row in getattr(saved, key)]
            elif field.data_type == DataType.LIST:
                value = []
            else:
                value = values.get(field.id)
            editors.append(FieldEditor(
                field_id=field.id,
                field_name=field.field_name,
                data_type=field.data_type,
                editor=EDITORS[DataType(field.data_type)],
                is_required=field.is_required,
                options=field.options,
                placeholder_text=field.placeholder_text,
                list_target_entity=field.list_target_entity,
                sub_entity_key=to_camel(key) if key else None,
                value=value,
            ))
        steps.append(WizardStep(
            category_id=category.id,
            name=category.name,
            description=category.description,
            step=step,
            fields=editors,
        ))
    return WizardOut(
        specification_id=spec.id,
        schema_id=spec.schema_id,
        title=spec.title,
        version=spec.version,
        steps=steps,
    )
