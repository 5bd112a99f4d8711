"""Observability helpers for rssriver."""

from __future__ import annotations

import logging
import time

import structlog
from prometheus_client import Counter, Gauge, Histogram

_logger_configured = False


def configure_logging(level: int = logging.INFO) -> None:
    global _logger_configured  # noqa: PLW0603 - module-level guard
    if _logger_configured:
        return
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _logger_configured = True


def bind_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_correlation_id() -> None:
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = "rssriver") -> structlog.BoundLogger:
    configure_logging()
    return structlog.get_logger(name)


class PipelineMetrics:
    """Prometheus metrics for the ingestion pipeline."""

    ingestion_latency = Histogram(
        "rssriver_ingestion_duration_seconds",
        "Time spent mapping and indexing a batch of feed entries.",
        buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
    )
    ingestion_documents = Histogram(
        "rssriver_ingestion_document_count",
        "Documents indexed per ingestion batch.",
        buckets=(0, 1, 5, 10, 25, 50, 100, 250),
    )
    documents_indexed = Counter(
        "rssriver_documents_indexed",
        "Feed documents indexed.",
        ["feedname"],
    )
    serialization_failures = Counter(
        "rssriver_serialization_failures",
        "Feed entries rejected by the document builder.",
        ["feedname"],
    )
    type_document_count = Gauge(
        "rssriver_type_document_count",
        "Number of documents stored per document type.",
        ["type_name"],
    )

    @classmethod
    def observe_ingestion(cls, feedname: str, duration_seconds: float, document_count: int) -> None:
        cls.ingestion_latency.observe(duration_seconds)
        cls.ingestion_documents.observe(document_count)
        cls.documents_indexed.labels(feedname=feedname).inc(document_count)

    @classmethod
    def observe_serialization_failure(cls, feedname: str) -> None:
        cls.serialization_failures.labels(feedname=feedname).inc()


class TimedSection:
    """Context manager capturing elapsed time for metrics."""

    def __init__(self, callback) -> None:
        self._callback = callback
        self._start = 0.0

    def __enter__(self) -> "TimedSection":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        duration = time.perf_counter() - self._start
        self._callback(duration)


__all__ = [
    "PipelineMetrics",
    "TimedSection",
    "bind_correlation_id",
    "clear_correlation_id",
    "configure_logging",
    "get_logger",
]
