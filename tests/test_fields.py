from __future__ import annotations

import pytest

from rssriver.fields import DIALECTS, NESTED_FIELDS, EnclosureField, FieldType, LocationField, RssField, SchemaField


def test_every_kind_has_a_spec_in_every_dialect():
    for dialect in DIALECTS:
        for kind in FieldType:
            if kind is FieldType.OBJECT:
                continue
            assert "type" in kind.spec(dialect)


def test_object_kind_has_no_flat_spec():
    with pytest.raises(ValueError):
        FieldType.OBJECT.spec()


def test_spec_returns_a_copy():
    spec = FieldType.DATE.spec()
    spec["format"] = "changed"
    assert FieldType.DATE.spec()["format"] == "dateOptionalTime"


def test_wire_names_are_unique():
    keys = [field.key for field in RssField]
    assert len(keys) == len(set(keys))


def test_object_fields_have_a_nested_registry():
    for field in RssField:
        if field.field_type is FieldType.OBJECT:
            assert field in NESTED_FIELDS
    assert NESTED_FIELDS[RssField.ENCLOSURES] is EnclosureField
    assert EnclosureField.LENGTH.field_type is FieldType.UNINDEXED_NUMBER


def test_location_keys_carry_no_field_type():
    assert [field.key for field in LocationField] == ["lat", "lon"]
    assert not issubclass(LocationField, SchemaField)
