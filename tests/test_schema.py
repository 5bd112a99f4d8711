"""Tests for index mapping generation."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest

from rssriver.documents import map_entry
from rssriver.models import Category, Description, Enclosure, FeedEntry, GeoModule, GeoPosition
from rssriver.schema import add_geopoint, generate_schema, schema_to_json
from rssriver.xcontent import json_builder

LEGACY_PAGE = {
    "page": {
        "properties": {
            "feedname": {"type": "string", "index": "not_analyzed"},
            "title": {"type": "string"},
            "author": {"type": "string"},
            "description": {"type": "string"},
            "link": {"type": "string", "index": "no"},
            "publishedDate": {"type": "date", "format": "dateOptionalTime", "store": "yes"},
            "source": {"type": "string"},
            "location": {"type": "geo_point"},
            "categories": {"type": "string", "index": "not_analyzed"},
            "enclosures": {
                "properties": {
                    "url": {"type": "string", "index": "no"},
                    "type": {"type": "string", "index": "not_analyzed"},
                    "length": {"type": "long", "index": "no"},
                },
            },
        },
    },
}


def _full_entry() -> FeedEntry:
    return FeedEntry(
        title="t",
        author="a",
        description=Description("d"),
        link="http://x/1",
        published_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        source="s",
        categories=[Category("c")],
        enclosures=[Enclosure("http://x/1.mp3", "audio/mpeg", 10)],
        geo=GeoModule(GeoPosition(48.8, 2.3)),
    )


def test_legacy_page_mapping():
    assert generate_schema("page") == LEGACY_PAGE


def test_location_and_enclosure_length_types():
    properties = generate_schema("page")["page"]["properties"]
    assert properties["location"]["type"] == "geo_point"
    assert properties["enclosures"]["properties"]["length"] == {"type": "long", "index": "no"}


def test_modern_dialect():
    properties = generate_schema("page", "modern")["page"]["properties"]
    assert properties["title"] == {"type": "text"}
    assert properties["categories"] == {"type": "keyword"}
    assert properties["link"] == {"type": "keyword", "index": False}
    assert properties["publishedDate"]["store"] is True
    assert properties["enclosures"]["properties"]["length"] == {"type": "long", "index": False}


def test_unknown_dialect_rejected():
    with pytest.raises(ValueError):
        generate_schema("page", "v0")


def test_river_is_left_to_dynamic_mapping():
    assert "river" not in generate_schema("page")["page"]["properties"]


def test_type_name_is_opaque():
    mapping = generate_schema("My Type/2")
    assert list(mapping) == ["My Type/2"]


def test_every_document_field_is_mapped():
    properties = generate_schema("page")["page"]["properties"]
    document = map_entry(_full_entry(), "feed", "run-1")
    for key in document:
        if key == "river":
            continue
        assert key in properties, key
    for enclosure in document["enclosures"]:
        assert set(enclosure) <= set(properties["enclosures"]["properties"])
    assert set(document["location"]) == {"lat", "lon"}


def test_schema_to_json_round_trip():
    assert json.loads(schema_to_json("page")) == LEGACY_PAGE


def test_add_helpers_write_into_builder():
    xcb = json_builder().start_object()
    add_geopoint(xcb, "where")
    assert xcb.end_object().build() == {"where": {"type": "geo_point"}}
