"""Glue between parsed feed entries, the document mapper and a sink."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, List, Set

from rssriver.documents import map_entry
from rssriver.fields import LEGACY
from rssriver.metrics.observability import PipelineMetrics, TimedSection, get_logger
from rssriver.models import FeedEntry
from rssriver.parsing import parse_feed
from rssriver.schema import generate_schema
from rssriver.store import DocumentSink
from rssriver.xcontent import SerializationError


class IngestionError(RuntimeError):
    """Raised when a feed entry cannot be turned into a document."""


@dataclass(frozen=True)
class IngestionConfig:
    """Configuration for feed ingestion."""

    type_name: str = "page"
    dialect: str = LEGACY
    river_name: str | None = None
    max_entries: int | None = None


class FeedIngestor:
    """Map feed entries into documents and hand them to a sink."""

    _logger = get_logger("ingestion")

    def __init__(self, sink: DocumentSink, config: IngestionConfig | None = None) -> None:
        self._sink = sink
        self._config = config or IngestionConfig()
        self._registered: Set[str] = set()

    @property
    def sink(self) -> DocumentSink:
        return self._sink

    def register_type(self, type_name: str | None = None) -> dict:
        """Generate the mapping for ``type_name`` and register it once with the sink."""

        name = type_name or self._config.type_name
        mapping = generate_schema(name, self._config.dialect)
        if name not in self._registered:
            self._sink.put_mapping(name, mapping)
            self._registered.add(name)
            self._logger.info("ingestion.mapping_registered", type_name=name, dialect=self._config.dialect)
        return mapping

    def ingest(
        self,
        entries: Iterable[FeedEntry],
        feedname: str,
        river_name: str | None = None,
        type_name: str | None = None,
    ) -> List[str]:
        name = type_name or self._config.type_name
        river = river_name if river_name is not None else self._config.river_name
        self.register_type(name)

        start = time.perf_counter()
        ids: List[str] = []
        for position, entry in enumerate(entries):
            if self._config.max_entries is not None and position >= self._config.max_entries:
                self._logger.warning("ingestion.truncated", feedname=feedname, max_entries=self._config.max_entries)
                break
            try:
                document = map_entry(entry, feedname, river)
            except SerializationError as exc:
                PipelineMetrics.observe_serialization_failure(feedname)
                self._logger.error("ingestion.entry_failed", feedname=feedname, position=position, detail=str(exc))
                raise IngestionError(f"Entry {position} of {feedname} ({entry.link or entry.title}): {exc}") from exc
            ids.append(self._sink.index(name, document))

        duration = time.perf_counter() - start
        PipelineMetrics.observe_ingestion(feedname, duration, len(ids))
        self._logger.info(
            "ingestion.complete",
            feedname=feedname,
            type_name=name,
            document_count=len(ids),
            duration_seconds=duration,
        )
        return ids

    def ingest_feed(
        self,
        content: str | bytes,
        feedname: str,
        river_name: str | None = None,
        type_name: str | None = None,
    ) -> List[str]:
        """Parse raw feed ``content`` and ingest its entries."""

        with TimedSection(lambda seconds: self._logger.debug("ingestion.parsed", feedname=feedname, seconds=seconds)):
            parsed = parse_feed(content)
        return self.ingest(parsed.entries, feedname, river_name=river_name, type_name=type_name)
