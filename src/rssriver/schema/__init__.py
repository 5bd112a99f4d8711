"""Index mapping generation for feed documents."""

from .service import (
    add_analyzed_string,
    add_date,
    add_geopoint,
    add_not_analyzed_string,
    add_not_indexed_long,
    add_not_indexed_string,
    generate_schema,
    schema_to_json,
)

__all__ = [
    "add_analyzed_string",
    "add_date",
    "add_geopoint",
    "add_not_analyzed_string",
    "add_not_indexed_long",
    "add_not_indexed_string",
    "generate_schema",
    "schema_to_json",
]
