"""Structured output builder used to materialise documents and mappings.

The builder mirrors a streaming JSON writer: callers open and close objects and
arrays and emit fields or values into the innermost open container. The result
is a plain ``dict`` (``build``) or its JSON text (``to_json``).
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any, List, Optional

_SCALARS = (str, bool, int, float)


class SerializationError(ValueError):
    """Raised when the builder cannot accept a value or a structural call."""


def serialize_datetime(value: datetime) -> str:
    """Render a datetime as an ISO-8601 UTC instant.

    Naive datetimes are taken to be UTC already.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _coerce(value: Any) -> Any:
    if value is None or isinstance(value, _SCALARS):
        return value
    if isinstance(value, datetime):
        return serialize_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    raise SerializationError(f"Cannot serialize value of type {type(value).__name__}")


class XContentBuilder:
    """Incrementally build a JSON-like document."""

    def __init__(self) -> None:
        self._root: Optional[dict] = None
        self._stack: List[Any] = []

    @property
    def closed(self) -> bool:
        return self._root is not None and not self._stack

    def start_object(self, name: Optional[str] = None) -> "XContentBuilder":
        obj: dict = {}
        if self._root is None:
            if name is not None:
                raise SerializationError("The root object cannot be named")
            self._root = obj
        else:
            self._attach(name, obj)
        self._stack.append(obj)
        return self

    def end_object(self) -> "XContentBuilder":
        self._pop(dict)
        return self

    def start_array(self, name: Optional[str] = None) -> "XContentBuilder":
        arr: list = []
        self._attach(name, arr)
        self._stack.append(arr)
        return self

    def end_array(self) -> "XContentBuilder":
        self._pop(list)
        return self

    def field(self, name: str, value: Any) -> "XContentBuilder":
        container = self._current()
        if not isinstance(container, dict):
            raise SerializationError(f"Field {name!r} emitted outside of an object")
        container[name] = _coerce(value)
        return self

    def value(self, value: Any) -> "XContentBuilder":
        container = self._current()
        if not isinstance(container, list):
            raise SerializationError("Array value emitted outside of an array")
        container.append(_coerce(value))
        return self

    def build(self) -> dict:
        if not self.closed:
            raise SerializationError("Document is not complete")
        return self._root  # type: ignore[return-value]

    def to_json(self, *, pretty: bool = False) -> str:
        return json.dumps(self.build(), indent=2 if pretty else None, ensure_ascii=False)

    def _current(self) -> Any:
        if not self._stack:
            raise SerializationError("No open object or array")
        return self._stack[-1]

    def _attach(self, name: Optional[str], child: Any) -> None:
        container = self._current()
        if isinstance(container, dict):
            if name is None:
                raise SerializationError("Nested object inside an object needs a field name")
            container[name] = child
        else:
            if name is not None:
                raise SerializationError(f"Named container {name!r} opened inside an array")
            container.append(child)

    def _pop(self, kind: type) -> None:
        container = self._current()
        if not isinstance(container, kind):
            expected = "object" if kind is dict else "array"
            raise SerializationError(f"Cannot end {expected}: innermost open container differs")
        self._stack.pop()


def json_builder() -> XContentBuilder:
    return XContentBuilder()


__all__ = ["SerializationError", "XContentBuilder", "json_builder", "serialize_datetime"]
