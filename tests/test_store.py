from __future__ import annotations

from uuid import uuid4

import chromadb

from rssriver.schema import generate_schema
from rssriver.store import ChromaDocumentSink, InMemoryDocumentSink, document_id


def _doc(link: str, title: str = "t", river: str | None = None) -> dict:
    document = {"feedname": "news", "title": title, "link": link, "publishedDate": None}
    if river is not None:
        document["river"] = river
    return document


def _chroma_sink() -> ChromaDocumentSink:
    return ChromaDocumentSink(f"test-{uuid4().hex[:8]}", client=chromadb.EphemeralClient(), dim=8)


def test_document_id_is_stable_per_link():
    assert document_id("page", _doc("http://x/1", "a")) == document_id("page", _doc("http://x/1", "b"))
    assert document_id("page", _doc("http://x/1")) != document_id("page", _doc("http://x/2"))
    assert document_id("page", _doc("http://x/1")) != document_id("other", _doc("http://x/1"))


def test_in_memory_reindex_overwrites():
    sink = InMemoryDocumentSink()
    first = sink.index("page", _doc("http://x/1", "old"))
    second = sink.index("page", _doc("http://x/1", "new"))
    assert first == second
    assert sink.count() == 1
    assert sink.get("page", first)["title"] == "new"


def test_in_memory_reset_by_type():
    sink = InMemoryDocumentSink()
    sink.index("page", _doc("http://x/1"))
    sink.index("post", _doc("http://x/1"))
    sink.reset("page")
    assert sink.count_by_type() == {"post": 1}
    sink.reset()
    assert sink.count() == 0


def test_chroma_index_and_get():
    sink = _chroma_sink()
    sink.put_mapping("page", generate_schema("page"))
    doc_id = sink.index("page", _doc("http://x/1", river="feeds-main"))
    assert sink.get("page", doc_id) == _doc("http://x/1", river="feeds-main")
    assert sink.get_mapping("page")["page"]["properties"]["location"]["type"] == "geo_point"
    assert sink.count() == 1
    assert sink.count("page") == 1
    assert sink.count("post") == 0


def test_chroma_count_and_reset_by_type():
    sink = _chroma_sink()
    sink.index("page", _doc("http://x/1"))
    sink.index("page", _doc("http://x/2"))
    sink.index("post", _doc("http://x/3"))
    assert sink.count_by_type() == {"page": 2, "post": 1}
    sink.reset("page")
    assert sink.count_by_type() == {"post": 1}
    sink.reset()
    assert sink.count() == 0


def test_chroma_mapping_survives_a_new_sink_and_reset():
    client = chromadb.EphemeralClient()
    name = f"test-{uuid4().hex[:8]}"
    ChromaDocumentSink(name, client=client, dim=8).put_mapping("page", generate_schema("page"))
    sink = ChromaDocumentSink(name, client=client, dim=8)
    sink.index("page", _doc("http://x/1"))
    assert sink.get_mapping("page") == generate_schema("page")
    assert sink.get_mapping("post") is None
    assert sink.count() == 1
    assert sink.count_by_type() == {"page": 1}
    sink.reset()
    assert sink.count() == 0
    assert sink.get_mapping("page") == generate_schema("page")
