"""Field vocabulary shared by the document mapper and the schema generator."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

RIVER = "river"

LEGACY = "legacy"
MODERN = "modern"
DIALECTS = (LEGACY, MODERN)


class FieldType(Enum):
    """Storage/indexing kinds understood by the indexing sink."""

    ANALYZED_TEXT = "analyzed-text"
    EXACT_TEXT = "exact-text"
    UNINDEXED_TEXT = "unindexed-text"
    UNINDEXED_NUMBER = "unindexed-number"
    DATE = "date"
    GEO_POINT = "geo-point"
    OBJECT = "object"

    def spec(self, dialect: str = LEGACY) -> Dict[str, Any]:
        """Return the type specification for this kind in the given mapping dialect."""

        try:
            table = _TYPE_SPECS[dialect]
        except KeyError:
            raise ValueError(f"Unknown mapping dialect: {dialect!r}") from None
        if self is FieldType.OBJECT:
            raise ValueError("Object fields are described by their nested properties")
        return dict(table[self])


_TYPE_SPECS: Dict[str, Dict[FieldType, Dict[str, Any]]] = {
    LEGACY: {
        FieldType.ANALYZED_TEXT: {"type": "string"},
        FieldType.EXACT_TEXT: {"type": "string", "index": "not_analyzed"},
        FieldType.UNINDEXED_TEXT: {"type": "string", "index": "no"},
        FieldType.UNINDEXED_NUMBER: {"type": "long", "index": "no"},
        FieldType.DATE: {"type": "date", "format": "dateOptionalTime", "store": "yes"},
        FieldType.GEO_POINT: {"type": "geo_point"},
    },
    MODERN: {
        FieldType.ANALYZED_TEXT: {"type": "text"},
        FieldType.EXACT_TEXT: {"type": "keyword"},
        FieldType.UNINDEXED_TEXT: {"type": "keyword", "index": False},
        FieldType.UNINDEXED_NUMBER: {"type": "long", "index": False},
        FieldType.DATE: {"type": "date", "format": "strict_date_optional_time", "store": True},
        FieldType.GEO_POINT: {"type": "geo_point"},
    },
}


class SchemaField(Enum):
    """Base for field registries; member values are ``(wire name, FieldType)``."""

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def field_type(self) -> FieldType:
        return self.value[1]


class RssField(SchemaField):
    """Top-level document fields, in emission order."""

    FEEDNAME = ("feedname", FieldType.EXACT_TEXT)
    TITLE = ("title", FieldType.ANALYZED_TEXT)
    AUTHOR = ("author", FieldType.ANALYZED_TEXT)
    DESCRIPTION = ("description", FieldType.ANALYZED_TEXT)
    LINK = ("link", FieldType.UNINDEXED_TEXT)
    PUBLISHED_DATE = ("publishedDate", FieldType.DATE)
    SOURCE = ("source", FieldType.ANALYZED_TEXT)
    LOCATION = ("location", FieldType.GEO_POINT)
    CATEGORIES = ("categories", FieldType.EXACT_TEXT)
    ENCLOSURES = ("enclosures", FieldType.OBJECT)


class LocationField(Enum):
    """Keys of the lat/lon pair inside the geo-point ``location`` field."""

    LAT = "lat"
    LON = "lon"

    @property
    def key(self) -> str:
        return self.value


class EnclosureField(SchemaField):
    URL = ("url", FieldType.UNINDEXED_TEXT)
    TYPE = ("type", FieldType.EXACT_TEXT)
    LENGTH = ("length", FieldType.UNINDEXED_NUMBER)


# Nested object fields and the sub-registry describing their properties.
NESTED_FIELDS = {RssField.ENCLOSURES: EnclosureField}


__all__ = [
    "DIALECTS",
    "EnclosureField",
    "FieldType",
    "LEGACY",
    "LocationField",
    "MODERN",
    "NESTED_FIELDS",
    "RIVER",
    "RssField",
    "SchemaField",
]
