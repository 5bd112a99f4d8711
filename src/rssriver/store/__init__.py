"""Document sinks receiving mapped feed documents and index mappings."""

from .service import ChromaDocumentSink, DocumentSink, InMemoryDocumentSink, document_id

__all__ = ["ChromaDocumentSink", "DocumentSink", "InMemoryDocumentSink", "document_id"]
