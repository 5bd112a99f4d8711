"""Pydantic models for the rssriver API."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from rssriver.models import Category, Description, Enclosure, FeedEntry, GeoModule, GeoPosition


class EnclosureModel(BaseModel):
    url: Optional[str] = None
    type: Optional[str] = None
    length: int = Field(default=0, ge=0, description="Attachment size in bytes")


class LocationModel(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class EntryModel(BaseModel):
    """JSON view of a parsed feed entry."""

    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    published_date: Optional[datetime] = Field(default=None, description="Publication instant; naive values are UTC")
    source: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    enclosures: List[EnclosureModel] = Field(default_factory=list)
    location: Optional[LocationModel] = None

    def to_entry(self) -> FeedEntry:
        return FeedEntry(
            title=self.title,
            author=self.author,
            description=Description(value=self.description) if self.description is not None else None,
            link=self.link,
            published_date=self.published_date,
            source=self.source,
            categories=[Category(name=name) for name in self.categories],
            enclosures=[Enclosure(url=e.url, type=e.type, length=e.length) for e in self.enclosures],
            geo=(
                GeoModule(position=GeoPosition(latitude=self.location.lat, longitude=self.location.lon))
                if self.location is not None
                else None
            ),
        )


class EntryIngestionRequest(BaseModel):
    entries: List[EntryModel] = Field(..., min_length=1, description="Feed entries to map and index")
    river: Optional[str] = Field(default=None, description="Ingestion-run tag stamped on each document")
    type_name: Optional[str] = Field(default=None, description="Document type; defaults to the configured type")


class IngestionResponse(BaseModel):
    feedname: str
    type_name: str
    ids: List[str]
    documents: int = Field(..., ge=0, description="Number of documents indexed")


class TypeStats(BaseModel):
    type_name: str
    documents: int


class IndexStatsResponse(BaseModel):
    total_documents: int
    types: List[TypeStats]
    mappings: Dict[str, bool] = Field(default_factory=dict, description="Whether a mapping is registered per type")
