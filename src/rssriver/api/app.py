"""FastAPI application exposing rssriver services."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import uuid4

import chromadb
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from rssriver.api.schemas import EntryIngestionRequest, IndexStatsResponse, IngestionResponse, TypeStats
from rssriver.config import Settings, get_settings
from rssriver.fields import DIALECTS
from rssriver.ingestion import FeedIngestor, IngestionConfig, IngestionError
from rssriver.metrics.observability import (
    PipelineMetrics,
    bind_correlation_id,
    clear_correlation_id,
    configure_logging,
    get_logger,
)
from rssriver.parsing import FeedParseError
from rssriver.schema import generate_schema
from rssriver.store import ChromaDocumentSink, DocumentSink


@dataclass(frozen=True)
class AppDependencies:
    ingestor: FeedIngestor
    sink: DocumentSink


def _build_dependencies(settings: Settings) -> AppDependencies:
    chroma_client = None
    if settings.chroma_host:
        chroma_client = chromadb.HttpClient(
            host=settings.chroma_host,
            port=settings.chroma_port or 8000,
            ssl=settings.chroma_ssl,
        )
    elif settings.is_test:
        chroma_client = chromadb.EphemeralClient()
    sink = ChromaDocumentSink(
        settings.chroma_collection,
        client=chroma_client,
        persist_directory=None if chroma_client else settings.chroma_persist_dir,
        dim=settings.embedding_dim,
    )
    ingestor = FeedIngestor(
        sink,
        IngestionConfig(
            type_name=settings.default_type,
            dialect=settings.mapping_dialect,
            river_name=settings.river_name,
            max_entries=settings.max_entries,
        ),
    )
    return AppDependencies(ingestor=ingestor, sink=sink)


def create_app(*, settings: Settings | None = None, dependencies: AppDependencies | None = None) -> FastAPI:
    settings = settings or get_settings()
    deps = dependencies or _build_dependencies(settings)

    configure_logging()
    logger = get_logger("api")
    app = FastAPI(title="rssriver API", version="0.1.0")
    app.state.dependencies = deps

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):  # type: ignore[override]
        correlation_id = request.headers.get("X-Request-ID", uuid4().hex)
        request.state.correlation_id = correlation_id
        bind_correlation_id(correlation_id)
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers["X-Correlation-ID"] = correlation_id
        return response

    def require_api_key(request: Request) -> None:
        expected = settings.api_key
        if not expected:
            return
        provided = request.headers.get("X-API-Key")
        if provided != expected:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")

    @app.exception_handler(IngestionError)
    async def handle_ingestion_error(request: Request, exc: IngestionError) -> JSONResponse:
        correlation_id = getattr(request.state, "correlation_id", uuid4().hex)
        logger.error("ingestion.error", correlation_id=correlation_id, detail=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": str(exc), "correlation_id": correlation_id},
        )

    def get_dependencies(request: Request) -> AppDependencies:
        return request.app.state.dependencies

    def get_ingestor(dep: AppDependencies = Depends(get_dependencies)) -> FeedIngestor:
        return dep.ingestor

    def get_sink(dep: AppDependencies = Depends(get_dependencies)) -> DocumentSink:
        return dep.sink

    @app.get("/mappings/{type_name}")
    async def read_mapping(type_name: str, dialect: str | None = None) -> dict:
        effective = dialect or settings.mapping_dialect
        if effective not in DIALECTS:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown dialect: {effective}")
        return generate_schema(type_name, effective)

    @app.put("/mappings/{type_name}", status_code=status.HTTP_201_CREATED)
    async def register_mapping(
        type_name: str,
        ingestor: FeedIngestor = Depends(get_ingestor),
        _auth: None = Depends(require_api_key),
    ) -> dict:
        return ingestor.register_type(type_name)

    @app.post("/feeds/{feedname}/entries", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
    async def ingest_entries(
        feedname: str,
        payload: EntryIngestionRequest,
        ingestor: FeedIngestor = Depends(get_ingestor),
        _auth: None = Depends(require_api_key),
    ) -> IngestionResponse:
        type_name = payload.type_name or settings.default_type
        entries = [entry.to_entry() for entry in payload.entries]
        ids = ingestor.ingest(entries, feedname, river_name=payload.river, type_name=type_name)
        return IngestionResponse(feedname=feedname, type_name=type_name, ids=ids, documents=len(ids))

    @app.post("/feeds/{feedname}/xml", response_model=IngestionResponse, status_code=status.HTTP_201_CREATED)
    async def ingest_feed_xml(
        feedname: str,
        request: Request,
        river: str | None = None,
        type_name: str | None = None,
        ingestor: FeedIngestor = Depends(get_ingestor),
        _auth: None = Depends(require_api_key),
    ) -> IngestionResponse:
        body = await request.body()
        if not body.strip():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty feed body")
        effective_type = type_name or settings.default_type
        try:
            ids = ingestor.ingest_feed(body, feedname, river_name=river, type_name=effective_type)
        except FeedParseError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
        return IngestionResponse(feedname=feedname, type_name=effective_type, ids=ids, documents=len(ids))

    @app.get("/index/stats", response_model=IndexStatsResponse)
    async def index_stats(sink: DocumentSink = Depends(get_sink)) -> IndexStatsResponse:
        by_type = sink.count_by_type()
        for name, count in by_type.items():
            PipelineMetrics.type_document_count.labels(type_name=name).set(count)
        return IndexStatsResponse(
            total_documents=sink.count(),
            types=[TypeStats(type_name=k, documents=v) for k, v in sorted(by_type.items())],
            mappings={name: sink.get_mapping(name) is not None for name in sorted(by_type)},
        )

    @app.delete("/index", status_code=status.HTTP_204_NO_CONTENT)
    async def reset_index(
        sink: DocumentSink = Depends(get_sink),
        type_name: str | None = None,
        _auth: None = Depends(require_api_key),
    ) -> Response:
        sink.reset(type_name)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/metrics")
    async def metrics() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        from rssriver import __version__

        return {"status": "ok", "version": __version__, "environment": settings.environment}

    @app.head("/healthz")
    async def healthcheck_head() -> Response:
        return Response(status_code=status.HTTP_200_OK)

    @app.get("/livez")
    async def liveness() -> dict[str, str]:
        return {"status": "alive"}

    return app
