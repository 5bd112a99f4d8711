from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rssriver.xcontent import SerializationError, json_builder, serialize_datetime


def test_nested_structure():
    xcb = (
        json_builder()
        .start_object()
        .field("a", 1)
        .start_object("b")
        .field("c", None)
        .end_object()
        .start_array("d")
        .value("x")
        .start_object()
        .field("e", True)
        .end_object()
        .end_array()
        .end_object()
    )
    assert xcb.build() == {"a": 1, "b": {"c": None}, "d": ["x", {"e": True}]}
    assert json.loads(xcb.to_json(pretty=True)) == xcb.build()


def test_naive_datetime_is_utc():
    assert serialize_datetime(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


def test_aware_datetime_converted_to_utc():
    value = datetime(2024, 1, 2, 0, 30, tzinfo=timezone(timedelta(hours=-5)))
    assert serialize_datetime(value) == "2024-01-02T05:30:00.000Z"


def test_date_value():
    xcb = json_builder().start_object().field("d", date(2024, 1, 2)).end_object()
    assert xcb.build() == {"d": "2024-01-02"}


def test_unsupported_value():
    with pytest.raises(SerializationError):
        json_builder().start_object().field("n", Decimal("1.5"))


def test_mismatched_end():
    with pytest.raises(SerializationError):
        json_builder().start_object().end_array()


def test_field_inside_array():
    with pytest.raises(SerializationError):
        json_builder().start_object().start_array("a").field("x", 1)


def test_value_inside_object():
    with pytest.raises(SerializationError):
        json_builder().start_object().value(1)


def test_incomplete_document():
    with pytest.raises(SerializationError):
        json_builder().start_object().start_object("open").build()


def test_named_root_rejected():
    with pytest.raises(SerializationError):
        json_builder().start_object("root")


def test_no_writes_after_close():
    xcb = json_builder().start_object().end_object()
    with pytest.raises(SerializationError):
        xcb.field("late", 1)
