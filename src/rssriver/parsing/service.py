"""Feed parsing backed by :mod:`feedparser`.

Only already-retrieved content is parsed here; fetching feeds is the job of the
surrounding driver. Every raw entry is converted into a :class:`FeedEntry` whose
collections only hold :class:`Category` and :class:`Enclosure` objects.
"""

from __future__ import annotations

import calendar
import io
import time
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Sequence

import feedparser

from rssriver.metrics.observability import get_logger
from rssriver.models import Category, Description, Enclosure, FeedEntry, GeoModule, GeoPosition, ParsedFeed


class FeedParseError(ValueError):
    """Raised when feed content cannot be parsed into any entry."""


_logger = get_logger("parsing")


def parse_feed(content: str | bytes) -> ParsedFeed:
    """Parse RSS/Atom ``content`` into a :class:`ParsedFeed`."""

    raw = content.encode("utf-8") if isinstance(content, str) else content
    # A stream keeps feedparser from treating the content as a URL or path.
    parsed = feedparser.parse(io.BytesIO(raw))
    if parsed.bozo and not parsed.entries:
        raise FeedParseError(f"Unable to parse feed: {parsed.get('bozo_exception')}")
    if parsed.bozo:
        _logger.warning(
            "parsing.bozo",
            detail=str(parsed.get("bozo_exception")),
            entry_count=len(parsed.entries),
        )

    entries = [entry_from_feedparser(raw_entry) for raw_entry in parsed.entries]
    feed = parsed.get("feed", {})
    _logger.info("parsing.complete", entry_count=len(entries), feed_title=feed.get("title"))
    return ParsedFeed(
        title=feed.get("title"),
        link=feed.get("link"),
        entries=entries,
        bozo=bool(parsed.bozo),
    )


def entry_from_feedparser(raw: Mapping[str, Any]) -> FeedEntry:
    """Convert one feedparser entry dictionary into a :class:`FeedEntry`."""

    return FeedEntry(
        title=raw.get("title"),
        author=raw.get("author"),
        description=_description(raw),
        link=raw.get("link"),
        published_date=_published(raw),
        source=_source(raw.get("source")),
        categories=_categories(raw.get("tags")),
        enclosures=_enclosures(raw),
        geo=_geo(raw),
    )


def _description(raw: Mapping[str, Any]) -> Optional[Description]:
    if "summary" in raw:
        detail = raw.get("summary_detail") or {}
        return Description(value=raw.get("summary"), content_type=detail.get("type"))
    contents = raw.get("content") or []
    if contents:
        first = contents[0]
        return Description(value=first.get("value"), content_type=first.get("type"))
    return None


def _published(raw: Mapping[str, Any]) -> Optional[datetime]:
    parsed: Optional[time.struct_time] = raw.get("published_parsed") or raw.get("updated_parsed")
    if parsed is None:
        return None
    # feedparser normalises parsed dates to UTC
    return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)


def _source(source: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not source:
        return None
    return source.get("title") or source.get("href")


def _categories(tags: Optional[Sequence[Mapping[str, Any]]]) -> List[Category]:
    categories: List[Category] = []
    for tag in tags or []:
        name = tag.get("term") or tag.get("label")
        if name and name.strip():
            categories.append(Category(name=name.strip(), domain=tag.get("scheme")))
    return categories


def _enclosures(raw: Mapping[str, Any]) -> List[Enclosure]:
    items = raw.get("enclosures")
    if items is None:
        items = [link for link in raw.get("links") or [] if link.get("rel") == "enclosure"]
    return [
        Enclosure(url=item.get("href") or item.get("url"), type=item.get("type"), length=_length(item.get("length")))
        for item in items
    ]


def _length(value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return 0


def _geo(raw: Mapping[str, Any]) -> Optional[GeoModule]:
    where = raw.get("where")
    if where:
        if where.get("type") != "Point":
            return GeoModule(position=None)
        # GeoJSON order: (lon, lat)
        lon, lat = where["coordinates"][:2]
        return GeoModule(position=GeoPosition(latitude=float(lat), longitude=float(lon)))
    point = raw.get("georss_point")
    if point:
        parts = point.replace(",", " ").split()
        try:
            lat, lon = float(parts[0]), float(parts[1])
        except (IndexError, ValueError):
            return GeoModule(position=None)
        return GeoModule(position=GeoPosition(latitude=lat, longitude=lon))
    return None
