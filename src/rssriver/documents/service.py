"""Document mapper turning one feed entry into an indexable document."""

from __future__ import annotations

from typing import Iterable, Optional

from rssriver.fields import RIVER, EnclosureField, LocationField, RssField
from rssriver.models import EnclosureBearing, FeedEntry, NameBearing
from rssriver.xcontent import SerializationError, XContentBuilder, json_builder


def _build(entry: FeedEntry, feedname: str, river_name: Optional[str]) -> XContentBuilder:
    description = entry.description.value if entry.description is not None else None
    out = (
        json_builder()
        .start_object()
        .field(RssField.FEEDNAME.key, feedname)
        .field(RssField.TITLE.key, entry.title)
        .field(RssField.AUTHOR.key, entry.author)
        .field(RssField.DESCRIPTION.key, description)
        .field(RssField.LINK.key, entry.link)
        .field(RssField.PUBLISHED_DATE.key, entry.published_date)
        .field(RssField.SOURCE.key, entry.source)
    )

    position = entry.geo.position if entry.geo is not None else None
    if position is not None:
        out.start_object(RssField.LOCATION.key)
        out.field(LocationField.LAT.key, _as_double(position.latitude))
        out.field(LocationField.LON.key, _as_double(position.longitude))
        out.end_object()

    categories = [c for c in _present(entry.categories) if isinstance(c, NameBearing)]
    if categories:
        out.start_array(RssField.CATEGORIES.key)
        for category in categories:
            out.value(category.name)
        out.end_array()

    enclosures = [e for e in _present(entry.enclosures) if isinstance(e, EnclosureBearing)]
    if enclosures:
        out.start_array(RssField.ENCLOSURES.key)
        for enclosure in enclosures:
            out.start_object()
            out.field(EnclosureField.URL.key, enclosure.url)
            out.field(EnclosureField.TYPE.key, enclosure.type)
            out.field(EnclosureField.LENGTH.key, _as_long(enclosure.length))
            out.end_object()
        out.end_array()

    if river_name is not None:
        out.field(RIVER, river_name)

    return out.end_object()


def _present(items: Optional[Iterable[object]]) -> Iterable[object]:
    return items if items else ()


def _as_long(length: object) -> object:
    if isinstance(length, bool):
        raise SerializationError(f"Enclosure length {length!r} is not an integer")
    if length is None or isinstance(length, int):
        return length
    try:
        return int(length)  # type: ignore[call-overload]
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Enclosure length {length!r} is not an integer") from exc


def _as_double(coordinate: object) -> float:
    if isinstance(coordinate, bool):
        raise SerializationError(f"Coordinate {coordinate!r} is not a number")
    try:
        return float(coordinate)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Coordinate {coordinate!r} is not a number") from exc


def map_entry(entry: FeedEntry, feedname: str, river_name: Optional[str] = None) -> dict:
    """Convert ``entry`` into a search document for the feed ``feedname``.

    Absent optional data is represented by ``None`` for scalar fields and by
    omission for ``location``, ``categories``, ``enclosures`` and ``river``.
    Raises :class:`~rssriver.xcontent.SerializationError` when a value cannot be
    serialized; nothing else is treated as an error.
    """

    return _build(entry, feedname, river_name).build()


def entry_to_json(entry: FeedEntry, feedname: str, river_name: Optional[str] = None, *, pretty: bool = False) -> str:
    """Same as :func:`map_entry` but returns the JSON text."""

    return _build(entry, feedname, river_name).to_json(pretty=pretty)
