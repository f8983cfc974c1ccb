"""Unit tests for the Pinecone and Chroma backends against mocked clients."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from folder_rag.retrieval.models import IndexEntry, MetadataFilter

ENTRIES = [
    IndexEntry(
        embedding=[0.1, 0.2],
        content="first chunk",
        metadata={"source": "/docs/a.txt", "chunk_index": 0, "page": None},
    ),
    IndexEntry(embedding=[0.3, 0.4], content="second chunk", metadata={"source": "/docs/a.txt", "chunk_index": 1}),
]


class TestPineconeVectorStore:
    @pytest.fixture()
    def index(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture()
    def store(self, index: MagicMock):
        from folder_rag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore("docs", namespace="team", index=index)

    def test_upsert_sends_text_in_metadata(self, store, index: MagicMock) -> None:
        ids = store.upsert(ENTRIES)

        index.upsert.assert_called_once()
        kwargs = index.upsert.call_args.kwargs
        assert kwargs["namespace"] == "team"
        vectors = kwargs["vectors"]
        assert [v["id"] for v in vectors] == ids
        assert vectors[0]["values"] == [0.1, 0.2]
        assert vectors[0]["metadata"] == {"source": "/docs/a.txt", "chunk_index": 0, "text": "first chunk"}

    def test_query_maps_matches(self, store, index: MagicMock) -> None:
        index.query.return_value = SimpleNamespace(
            matches=[
                SimpleNamespace(id="v1", score=0.9, metadata={"source": "/docs/a.txt", "text": "first chunk"}),
                SimpleNamespace(id="v2", score=0.7, metadata=None),
            ]
        )

        hits = store.similarity_search([0.1, 0.2], k=2, filters=[MetadataFilter.equals("source", "/docs/a.txt")])

        index.query.assert_called_once_with(
            vector=[0.1, 0.2],
            top_k=2,
            include_metadata=True,
            filter={"source": {"$eq": "/docs/a.txt"}},
            namespace="team",
        )
        assert hits[0] == {"id": "v1", "content": "first chunk", "score": 0.9, "metadata": {"source": "/docs/a.txt"}}
        assert hits[1]["content"] == ""

    def test_health_check(self, store, index: MagicMock) -> None:
        assert store.health_check() is True
        index.describe_index_stats.side_effect = RuntimeError("unreachable")
        assert store.health_check() is False

    def test_delete(self, store, index: MagicMock) -> None:
        store.delete(["v1"])
        index.delete.assert_called_once_with(ids=["v1"], namespace="team")

    def test_index_name_required(self) -> None:
        from folder_rag.retrieval.pinecone_store import PineconeVectorStore

        with pytest.raises(ValueError, match="PINECONE_INDEX"):
            PineconeVectorStore("")


class TestChromaVectorStore:
    @pytest.fixture(autouse=True)
    def _skip_if_chroma_broken(self) -> None:
        """Skip if chromadb can't be imported in this environment."""
        try:
            from folder_rag.retrieval.chroma_store import ChromaVectorStore  # noqa: F401
        except Exception:
            pytest.skip("chromadb not importable in this environment")

    @pytest.fixture()
    def client(self) -> MagicMock:
        return MagicMock()

    @pytest.fixture()
    def store(self, client: MagicMock):
        from folder_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore("docs", client=client)

    def test_collection_opened_once(self, store, client: MagicMock) -> None:
        client.get_or_create_collection.assert_called_once_with("docs")

    def test_upsert(self, store, client: MagicMock) -> None:
        collection = client.get_or_create_collection.return_value
        ids = store.upsert(ENTRIES)
        collection.upsert.assert_called_once_with(
            ids=ids,
            embeddings=[[0.1, 0.2], [0.3, 0.4]],
            documents=["first chunk", "second chunk"],
            metadatas=[
                {"source": "/docs/a.txt", "chunk_index": 0},
                {"source": "/docs/a.txt", "chunk_index": 1},
            ],
        )

    def test_query_converts_distances(self, store, client: MagicMock) -> None:
        collection = client.get_or_create_collection.return_value
        collection.query.return_value = {
            "ids": [["c1"]],
            "documents": [["first chunk"]],
            "metadatas": [[{"source": "/docs/a.txt"}]],
            "distances": [[1.0]],
        }

        hits = store.similarity_search([0.1, 0.2], k=1)

        assert hits == [{"id": "c1", "content": "first chunk", "score": 0.5, "metadata": {"source": "/docs/a.txt"}}]
        assert collection.query.call_args.kwargs["where"] is None

    def test_health_check(self, store, client: MagicMock) -> None:
        assert store.health_check() is True
        client.heartbeat.side_effect = ConnectionError("down")
        assert store.health_check() is False
