"""Field value validation for each dataType."""

import pytest

from spec_manager.db.models.schema import SchemaFieldRow
from spec_manager.errors.exceptions import ValidationError
from spec_manager.services.content_model import (
    decode_value,
    derive_title,
    encode_value,
    next_version,
    sub_entity_key,
    validate_content,
    validate_field_value,
)


def make_field(field_id="f-1", name="Field", data_type="TEXT", options=None, target=None):
    return SchemaFieldRow(
        id=field_id,
        category_id="c-1",
        field_name=name,
        data_type=data_type,
        is_required=False,
        options=options,
        list_target_entity=target,
        display_order=1,
    )


def test_text_accepts_strings():
    assert validate_field_value(make_field(), "hello") == "hello"
    assert validate_field_value(make_field(data_type="TEXTAREA"), "") == ""


def test_text_rejects_lists():
    with pytest.raises(ValidationError, match="expects a string"):
        validate_field_value(make_field(name="Title"), ["a"])


def test_none_clears_every_type():
    for data_type in ("TEXT", "DATE", "RADIO", "CHECKBOX"):
        assert validate_field_value(make_field(data_type=data_type, options=["a"]), None) is None


def test_date_normalized_and_checked():
    field = make_field(name="Deadline", data_type="DATE")
    assert validate_field_value(field, "2026-03-31") == "2026-03-31"
    assert validate_field_value(field, "") is None
    with pytest.raises(ValidationError, match="Deadline"):
        validate_field_value(field, "next week")


def test_radio_must_be_an_option():
    field = make_field(name="Kind", data_type="RADIO", options=["A", "B"])
    assert validate_field_value(field, "B") == "B"
    with pytest.raises(ValidationError) as exc_info:
        validate_field_value(field, "C")
    assert exc_info.value.details["options"] == ["A", "B"]


def test_checkbox_subset_deduplicated():
    field = make_field(name="Scope", data_type="CHECKBOX", options=["A", "B", "C"])
    assert validate_field_value(field, ["C", "A", "C"]) == ["C", "A"]
    assert validate_field_value(field, []) == []
    with pytest.raises(ValidationError):
        validate_field_value(field, ["A", "Z"])
    with pytest.raises(ValidationError):
        validate_field_value(field, "A")


def test_list_values_never_in_content():
    field = make_field(name="Deliverables", data_type="LIST", target="Deliverable")
    with pytest.raises(ValidationError, match="deliverables"):
        validate_field_value(field, "x")


def test_sub_entity_key():
    assert sub_entity_key(make_field(data_type="LIST", target="BusinessTask")) == "business_tasks"
    assert sub_entity_key(make_field(data_type="LIST", target="Unknown")) is None
    assert sub_entity_key(make_field(data_type="TEXT")) is None


def test_validate_content_rejects_unknown_ids():
    with pytest.raises(ValidationError) as exc_info:
        validate_content([make_field()], {"f-1": "ok", "f-9": "nope"})
    assert exc_info.value.details == {"fieldIds": ["f-9"]}


def test_encoding_preserves_shapes():
    assert decode_value(encode_value(["a", "b"])) == ["a", "b"]
    assert decode_value(encode_value("日本語")) == "日本語"
    # Plain text written by other tools is returned as-is
    assert decode_value("not json") == "not json"


def test_derive_title_uses_first_non_empty_text_field():
    fields = [
        make_field("f-1", data_type="TEXTAREA"),
        make_field("f-2", data_type="TEXT"),
        make_field("f-3", data_type="TEXT"),
    ]
    assert derive_title(fields, {"f-1": "long", "f-2": "  ", "f-3": " Title "}) == "Title"
    assert derive_title(fields, {"f-1": "long"}) is None


@pytest.mark.parametrize(
    "version,expected",
    [("1.0", "1.1"), ("1.3", "1.4"), ("2.9", "2.10"), ("3", "3.1"), ("garbage", "1.1")],
)
def test_next_version(version, expected):
    assert next_version(version) == expected
