"""Document sink implementations."""

from __future__ import annotations

import hashlib
import json
import math
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Protocol, Tuple
from uuid import NAMESPACE_URL, uuid5

import chromadb
from chromadb.api import ClientAPI

from rssriver.fields import RIVER, RssField
from rssriver.metrics.observability import get_logger

# Scalar document fields copied into Chroma metadata for filtering.
_METADATA_FIELDS = (RssField.FEEDNAME.key, RssField.LINK.key, RssField.PUBLISHED_DATE.key, RIVER)
# Metadata ``type`` of the reserved records holding registered mappings.
MAPPING_TYPE = "_mapping"


class DocumentSink(Protocol):
    """Protocol for storage/indexing backends."""

    def put_mapping(self, type_name: str, mapping: Mapping[str, object]) -> None:
        """Register the mapping for documents of ``type_name``."""

    def get_mapping(self, type_name: str) -> Mapping[str, object] | None:
        """Return the registered mapping, if any."""

    def index(self, type_name: str, document: Mapping[str, object]) -> str:
        """Store a document and return its id."""

    def count(self, type_name: str | None = None) -> int:
        """Return the number of stored documents."""

    def count_by_type(self) -> Mapping[str, int]:
        """Return a mapping of document type to document count."""

    def reset(self, type_name: str | None = None) -> None:
        """Remove stored documents."""


def document_id(type_name: str, document: Mapping[str, object]) -> str:
    """Deterministic id so re-ingesting the same entry overwrites it."""

    anchor = document.get(RssField.LINK.key) or document.get(RssField.TITLE.key) or json.dumps(document, sort_keys=True)
    return uuid5(NAMESPACE_URL, f"{type_name}/{document.get(RssField.FEEDNAME.key)}/{anchor}").hex


class InMemoryDocumentSink:
    """Dictionary-backed sink used by tests and ad-hoc runs."""

    def __init__(self) -> None:
        self._mappings: Dict[str, Mapping[str, object]] = {}
        self._documents: Dict[str, Dict[str, Mapping[str, object]]] = {}

    def put_mapping(self, type_name: str, mapping: Mapping[str, object]) -> None:
        self._mappings[type_name] = mapping

    def get_mapping(self, type_name: str) -> Mapping[str, object] | None:
        return self._mappings.get(type_name)

    def index(self, type_name: str, document: Mapping[str, object]) -> str:
        doc_id = document_id(type_name, document)
        self._documents.setdefault(type_name, {})[doc_id] = document
        return doc_id

    def get(self, type_name: str, doc_id: str) -> Mapping[str, object] | None:
        return self._documents.get(type_name, {}).get(doc_id)

    def count(self, type_name: str | None = None) -> int:
        if type_name is not None:
            return len(self._documents.get(type_name, {}))
        return sum(len(docs) for docs in self._documents.values())

    def count_by_type(self) -> Mapping[str, int]:
        return {name: len(docs) for name, docs in self._documents.items() if docs}

    def reset(self, type_name: str | None = None) -> None:
        if type_name is None:
            self._documents.clear()
        else:
            self._documents.pop(type_name, None)


class ChromaDocumentSink:
    """Chroma-backed sink storing documents as JSON with scalar metadata."""

    _logger = get_logger("store")

    def __init__(
        self,
        collection_name: str = "rssriver",
        *,
        client: ClientAPI | None = None,
        persist_directory: str | Path | None = None,
        dim: int = 64,
    ) -> None:
        if client is not None:
            self._client = client
        elif persist_directory is not None:
            self._client = chromadb.PersistentClient(path=str(persist_directory))
        else:
            self._client = chromadb.EphemeralClient()
        self._collection = self._client.get_or_create_collection(
            name=collection_name,
            metadata={"hnsw:space": "cosine"},
        )
        self._dim = dim

    def put_mapping(self, type_name: str, mapping: Mapping[str, object]) -> None:
        # Mappings live in the collection as reserved records so they survive restarts.
        self._collection.upsert(
            ids=[self._mapping_id(type_name)],
            documents=[json.dumps(mapping, ensure_ascii=False)],
            embeddings=[list(self._hash_to_vector(type_name))],
            metadatas=[{"type": MAPPING_TYPE, "mapping_for": type_name}],
        )
        self._logger.info("store.mapping", type_name=type_name)

    def get_mapping(self, type_name: str) -> Mapping[str, object] | None:
        batch = self._collection.get(ids=[self._mapping_id(type_name)], include=["documents"])
        documents = batch.get("documents") or []
        return json.loads(documents[0]) if documents else None

    def index(self, type_name: str, document: Mapping[str, object]) -> str:
        doc_id = document_id(type_name, document)
        text = json.dumps(document, ensure_ascii=False)
        self._collection.upsert(
            ids=[doc_id],
            documents=[text],
            embeddings=[list(self._hash_to_vector(self._searchable_text(document)))],
            metadatas=[self._metadata(type_name, document)],
        )
        return doc_id

    def get(self, type_name: str, doc_id: str) -> Mapping[str, object] | None:
        batch = self._collection.get(ids=[doc_id], where={"type": type_name}, include=["documents"])
        documents = batch.get("documents") or []
        return json.loads(documents[0]) if documents else None

    def count(self, type_name: str | None = None) -> int:
        batch = self._collection.get(where=self._documents_where(type_name), include=["metadatas"])
        return len(batch.get("ids") or [])

    def count_by_type(self) -> Mapping[str, int]:
        counts: dict[str, int] = {}
        # paginate through metadatas only
        limit = 1000
        offset = 0
        while True:
            batch = self._collection.get(include=["metadatas"], limit=limit, offset=offset)
            metadatas = batch.get("metadatas") or []
            for md in metadatas:
                name = str((md or {}).get("type", "")) or "-"
                if name != MAPPING_TYPE:
                    counts[name] = counts.get(name, 0) + 1
            if len(metadatas) < limit:
                break
            offset += limit
        return counts

    def reset(self, type_name: str | None = None) -> None:
        """Remove documents; registered mappings are kept."""

        ids = self._collection.get(where=self._documents_where(type_name), include=["metadatas"]).get("ids") or []
        if ids:
            self._collection.delete(ids=ids)
        self._logger.info("store.reset", type_name=type_name, removed=len(ids))

    @staticmethod
    def _mapping_id(type_name: str) -> str:
        return uuid5(NAMESPACE_URL, f"{MAPPING_TYPE}/{type_name}").hex

    @staticmethod
    def _documents_where(type_name: str | None) -> Dict[str, object]:
        if type_name is not None:
            return {"type": type_name}
        return {"type": {"$ne": MAPPING_TYPE}}

    @staticmethod
    def _metadata(type_name: str, document: Mapping[str, object]) -> MutableMapping[str, object]:
        metadata: MutableMapping[str, object] = {"type": type_name}
        for key in _METADATA_FIELDS:
            value = document.get(key)
            # Chroma metadata only holds non-null scalars
            if isinstance(value, (str, int, float, bool)):
                metadata[key] = value
        return metadata

    @staticmethod
    def _searchable_text(document: Mapping[str, object]) -> str:
        keys = (RssField.TITLE.key, RssField.AUTHOR.key, RssField.DESCRIPTION.key, RssField.SOURCE.key)
        return " ".join(str(document[key]) for key in keys if document.get(key))

    def _hash_to_vector(self, text: str) -> Tuple[float, ...]:
        digest = hashlib.sha256(text.encode("utf-8")).digest()
        repeat = (self._dim + len(digest) - 1) // len(digest)
        raw = (digest * repeat)[: self._dim]
        vector = [byte / 255.0 for byte in raw]
        norm = math.sqrt(sum(value * value for value in vector)) or 1.0
        return tuple(value / norm for value in vector)
