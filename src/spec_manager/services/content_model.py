"""Field value model for the EAV content store.

A field's ``dataType`` decides the shape of its value:

    TEXT, TEXTAREA  -> str
    DATE            -> ISO date string (YYYY-MM-DD)
    RADIO           -> str drawn from the field's options
    CHECKBOX        -> list[str], a subset of the field's options
    LIST            -> rows of the sub-entity named by ``listTargetEntity``

Non-LIST values are stored one row per (specification, field) as JSON text.
LIST values never enter the content map; they travel in the four sub-entity
arrays of the save payload.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from spec_manager.db.models.schema import SchemaFieldRow
from spec_manager.db.models.specification import (
    BasicBusinessRequirementRow,
    BusinessTaskRow,
    ContractorRequirementRow,
    DeliverableRow,
)
from spec_manager.errors.exceptions import ValidationError
from spec_manager.models.enums import DataType, ListTargetEntity
from spec_manager.models.specification import FieldValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubEntity:
    """Where the rows of one LIST target live."""

    payload_key: str
    row_class: type


SUB_ENTITIES: dict[ListTargetEntity, SubEntity] = {
    ListTargetEntity.DELIVERABLE: SubEntity("deliverables", DeliverableRow),
    ListTargetEntity.CONTRACTOR_REQUIREMENT: SubEntity("contractor_requirements", ContractorRequirementRow),
    ListTargetEntity.BASIC_BUSINESS_REQUIREMENT: SubEntity(
        "basic_business_requirements", BasicBusinessRequirementRow
    ),
    ListTargetEntity.BUSINESS_TASK: SubEntity("business_tasks", BusinessTaskRow),
}

EDITORS: dict[DataType, str] = {
    DataType.TEXT: "text",
    DataType.TEXTAREA: "textarea",
    DataType.DATE: "date",
    DataType.RADIO: "radio",
    DataType.CHECKBOX: "checkbox",
    DataType.LIST: "list",
}


def _require_str(field: SchemaFieldRow, value) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Field '{field.field_name}' expects a string value", {"fieldId": field.id})
    return value


def _text(field: SchemaFieldRow, value) -> str:
    return _require_str(field, value)


def _date(field: SchemaFieldRow, value) -> str:
    text = _require_str(field, value)
    try:
        return date.fromisoformat(text).isoformat()
    except ValueError as exc:
        raise ValidationError(
            f"Field '{field.field_name}' expects an ISO date (YYYY-MM-DD)", {"fieldId": field.id}
        ) from exc


def _radio(field: SchemaFieldRow, value) -> str:
    choice = _require_str(field, value)
    if choice not in (field.options or []):
        raise ValidationError(
            f"'{choice}' is not an option of field '{field.field_name}'",
            {"fieldId": field.id, "options": field.options or []},
        )
    return choice


def _checkbox(field: SchemaFieldRow, value) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"Field '{field.field_name}' expects a list of strings", {"fieldId": field.id})
    unknown = [v for v in value if v not in (field.options or [])]
    if unknown:
        raise ValidationError(
            f"Values {unknown} are not options of field '{field.field_name}'",
            {"fieldId": field.id, "options": field.options or []},
        )
    # Keep the caller's order, drop repeats
    return list(dict.fromkeys(value))


def _list(field: SchemaFieldRow, value):
    raise ValidationError(
        f"Field '{field.field_name}' is a LIST field; send its rows in the "
        f"'{sub_entity_key(field) or 'sub-entity'}' array instead of the content map",
        {"fieldId": field.id},
    )


_VALIDATORS: dict[DataType, Callable[[SchemaFieldRow, object], FieldValue]] = {
    DataType.TEXT: _text,
    DataType.TEXTAREA: _text,
    DataType.DATE: _date,
    DataType.RADIO: _radio,
    DataType.CHECKBOX: _checkbox,
    DataType.LIST: _list,
}


def sub_entity_key(field: SchemaFieldRow) -> str | None:
    """Payload key of the sub-entity a LIST field feeds, if any."""
    if field.data_type != DataType.LIST or not field.list_target_entity:
        return None
    try:
        return SUB_ENTITIES[ListTargetEntity(field.list_target_entity)].payload_key
    except ValueError:
        return None


def validate_field_value(field: SchemaFieldRow, value) -> FieldValue:
    """Check ``value`` against the shape its field's dataType demands.

    ``None`` clears a value. For every type but TEXT/TEXTAREA an empty
    string is treated as cleared too.
    """
    data_type = DataType(field.data_type)
    if value is None:
        return None
    if value == "" and data_type not in (DataType.TEXT, DataType.TEXTAREA):
        return None
    return _VALIDATORS[data_type](field, value)


def validate_content(fields: list[SchemaFieldRow], content: dict[str, object]) -> dict[str, FieldValue]:
    """Validate a whole content map keyed by field id.

    Raises:
        ValidationError: unknown field id or a value of the wrong shape.
    """
    by_id = {f.id: f for f in fields}
    unknown = sorted(k for k in content if k not in by_id)
    if unknown:
        raise ValidationError("Content references fields outside the specification's schema", {"fieldIds": unknown})
    return {field_id: validate_field_value(by_id[field_id], value) for field_id, value in content.items()}


def encode_value(value: FieldValue) -> str:
    return json.dumps(value, ensure_ascii=False)


def decode_value(raw: str) -> FieldValue:
    """Decode a stored value; text that is not JSON is returned unchanged."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return raw


def derive_title(fields: list[SchemaFieldRow], content: dict[str, FieldValue]) -> str | None:
    """First non-empty TEXT value in schema order, used as the document title."""
    for field in fields:
        if field.data_type != DataType.TEXT:
            continue
        value = content.get(field.id)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def next_version(version: str) -> str:
    """Bump the minor part of a ``major.minor`` version string."""
    major, _, minor = version.partition(".")
    try:
        return f"{int(major)}.{int(minor or 0) + 1}"
    except ValueError:
        logger.warning("Unparseable specification version %r, restarting at 1.1", version)
        return "1.1"
