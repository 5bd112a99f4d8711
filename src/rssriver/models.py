"""Feed entry models handed to the document mapper."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class NameBearing(Protocol):
    """Anything exposing a category-like ``name``."""

    name: Optional[str]


@runtime_checkable
class EnclosureBearing(Protocol):
    """Anything exposing enclosure ``url``/``type``/``length``."""

    url: Optional[str]
    type: Optional[str]
    length: int


@dataclass(frozen=True)
class Description:
    """Rich-text description attached to an entry."""

    value: Optional[str]
    content_type: Optional[str] = None


@dataclass(frozen=True)
class Category:
    name: Optional[str]
    domain: Optional[str] = None


@dataclass(frozen=True)
class Enclosure:
    """Media attachment referenced by an entry."""

    url: Optional[str]
    type: Optional[str]
    length: int = 0


@dataclass(frozen=True)
class GeoPosition:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoModule:
    """GeoRSS extension data carried by an entry."""

    position: Optional[GeoPosition] = None


@dataclass(frozen=True)
class FeedEntry:
    """Parsed syndication entry (one RSS ``<item>`` or Atom ``<entry>``)."""

    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[Description] = None
    link: Optional[str] = None
    published_date: Optional[datetime] = None
    source: Optional[str] = None
    categories: Optional[Sequence[object]] = field(default_factory=tuple)
    enclosures: Optional[Sequence[object]] = field(default_factory=tuple)
    geo: Optional[GeoModule] = None


@dataclass(frozen=True)
class ParsedFeed:
    """Feed-level metadata together with its typed entries."""

    title: Optional[str]
    link: Optional[str]
    entries: Sequence[FeedEntry]
    bozo: bool = False
