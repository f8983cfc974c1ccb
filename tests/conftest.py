"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any

import pytest
from langchain_core.embeddings import Embeddings

from folder_rag.config import Settings
from folder_rag.retrieval.base import VectorStoreBase
from folder_rag.retrieval.models import IndexEntry, MetadataFilter


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ───────────────────────────────────────────────────────────────


class FakeEmbeddings(Embeddings):
    """Deterministic 3-d embeddings that record every call.

    ``fail_on_call`` makes the n-th ``embed_documents`` call (1-based) raise.
    """

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.document_calls: list[list[str]] = []
        self.query_calls: list[str] = []
        self.fail_on_call = fail_on_call

    @staticmethod
    def _vector(text: str) -> list[float]:
        return [float(len(text)), float(text.count("a")), 1.0]

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls.append(list(texts))
        if self.fail_on_call == len(self.document_calls):
            raise ConnectionError("embedding provider unavailable")
        return [self._vector(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.query_calls.append(text)
        return self._vector(text)


class InMemoryVectorStore(VectorStoreBase):
    """Dict-backed store; ``fail_on_call`` makes the n-th upsert (1-based) raise."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        super().__init__("memory")
        self.entries: dict[str, IndexEntry] = {}
        self.upsert_calls: list[list[str]] = []
        self.fail_on_call = fail_on_call

    def _upsert_entries(self, ids: list[str], entries: list[IndexEntry]) -> None:
        self.upsert_calls.append(ids)
        if self.fail_on_call == len(self.upsert_calls):
            raise TimeoutError("upsert timed out")
        for vid, entry in zip(ids, entries):
            self.entries[vid] = entry

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 4,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        def score(entry: IndexEntry) -> float:
            return sum(a * b for a, b in zip(query_embedding, entry.embedding))

        ranked = sorted(self.entries.items(), key=lambda item: score(item[1]), reverse=True)
        return [
            {"id": vid, "content": e.content, "score": score(e), "metadata": e.metadata}
            for vid, e in ranked[:k]
        ]

    def health_check(self) -> bool:
        return True


class RecordingProgress:
    """Progress observer that keeps every increment."""

    def __init__(self) -> None:
        self.increments: list[int] = []
        self.closed = False

    def advance(self, n: int = 1) -> None:
        self.increments.append(n)

    def close(self) -> None:
        self.closed = True


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture()
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture()
def make_settings(monkeypatch: pytest.MonkeyPatch):
    """Build :class:`Settings` that ignore any ``.env`` file and ambient overrides."""
    for var in ("FOLDER_PATH", "PINECONE_INDEX", "CHUNK_SIZE", "CHUNK_OVERLAP", "VECTOR_BACKEND"):
        monkeypatch.delenv(var, raising=False)

    def _make(**overrides: Any) -> Settings:
        return Settings(_env_file=None, **overrides)

    return _make


@pytest.fixture()
def make_embeddings():
    return FakeEmbeddings


@pytest.fixture()
def make_store():
    return InMemoryVectorStore
