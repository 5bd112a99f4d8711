"""Feed ingestion pipeline."""

from .service import FeedIngestor, IngestionConfig, IngestionError

__all__ = ["FeedIngestor", "IngestionConfig", "IngestionError"]
