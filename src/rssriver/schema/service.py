"""Schema generator producing the index mapping for feed documents.

The mapping has the shape ``{type_name: {"properties": {...}}}`` and covers
every field the document mapper can emit except the run-specific ``river``
tag, which is left to the sink's dynamic mapping.
"""

from __future__ import annotations

from typing import Callable, Dict, Type

from rssriver.fields import DIALECTS, LEGACY, NESTED_FIELDS, FieldType, RssField, SchemaField
from rssriver.xcontent import XContentBuilder, json_builder

PROPERTIES = "properties"


def _add(xcb: XContentBuilder, field_name: str, kind: FieldType, dialect: str) -> XContentBuilder:
    xcb.start_object(field_name)
    for key, value in kind.spec(dialect).items():
        xcb.field(key, value)
    return xcb.end_object()


def add_analyzed_string(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    return _add(xcb, field_name, FieldType.ANALYZED_TEXT, dialect)


def add_not_analyzed_string(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    return _add(xcb, field_name, FieldType.EXACT_TEXT, dialect)


def add_not_indexed_string(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    return _add(xcb, field_name, FieldType.UNINDEXED_TEXT, dialect)


def add_not_indexed_long(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    return _add(xcb, field_name, FieldType.UNINDEXED_NUMBER, dialect)


def add_date(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    """Date field accepting date-only or full datetime values, stored explicitly."""

    return _add(xcb, field_name, FieldType.DATE, dialect)


def add_geopoint(xcb: XContentBuilder, field_name: str, dialect: str = LEGACY) -> XContentBuilder:
    return _add(xcb, field_name, FieldType.GEO_POINT, dialect)


_ADDERS: Dict[FieldType, Callable[[XContentBuilder, str, str], XContentBuilder]] = {
    FieldType.ANALYZED_TEXT: add_analyzed_string,
    FieldType.EXACT_TEXT: add_not_analyzed_string,
    FieldType.UNINDEXED_TEXT: add_not_indexed_string,
    FieldType.UNINDEXED_NUMBER: add_not_indexed_long,
    FieldType.DATE: add_date,
    FieldType.GEO_POINT: add_geopoint,
}


def _add_properties(xcb: XContentBuilder, registry: Type[SchemaField], dialect: str) -> None:
    xcb.start_object(PROPERTIES)
    for member in registry:
        if member.field_type is FieldType.OBJECT:
            xcb.start_object(member.key)
            _add_properties(xcb, NESTED_FIELDS[member], dialect)
            xcb.end_object()
        else:
            _ADDERS[member.field_type](xcb, member.key, dialect)
    xcb.end_object()


def _build(type_name: str, dialect: str) -> XContentBuilder:
    if dialect not in DIALECTS:
        raise ValueError(f"Unknown mapping dialect: {dialect!r}")
    xcb = json_builder().start_object()
    xcb.start_object(type_name)
    _add_properties(xcb, RssField, dialect)
    xcb.end_object()
    return xcb.end_object()


def generate_schema(type_name: str, dialect: str = LEGACY) -> dict:
    """Build the mapping for feed documents stored under ``type_name``."""

    return _build(type_name, dialect).build()


def schema_to_json(type_name: str, dialect: str = LEGACY, *, pretty: bool = True) -> str:
    return _build(type_name, dialect).to_json(pretty=pretty)
