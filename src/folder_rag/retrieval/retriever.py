"""Semantic retriever — query embedding, vector search and citations.

Usage::

    from folder_rag.retrieval.retriever import SemanticRetriever

    retriever = SemanticRetriever(store, embeddings)
    for r in retriever.search("What does the lease say about pets?", k=4):
        print(r.citation.short_ref(), r.content[:80])

The query is embedded with the *same* embedding function that produced the
indexed vectors; scores are meaningless otherwise.  That equivalence is an
operational requirement of the deployment and is not checked here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from folder_rag.retrieval.models import Citation, MetadataFilter, RetrievalResult

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from folder_rag.config import Settings
    from folder_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


class SemanticRetriever:
    """High-level retriever that wraps any :class:`VectorStoreBase`.

    Parameters
    ----------
    store:
        A concrete vector-store backend.
    embeddings:
        The embedding function used when the index was built.
    default_k:
        Default number of results returned by :meth:`search`.
    score_threshold:
        Minimum similarity score; results below this are discarded.  ``None``
        keeps every hit, since Pinecone cosine and dot-product scores can be
        negative.
    """

    def __init__(
        self,
        store: VectorStoreBase,
        embeddings: Embeddings,
        *,
        default_k: int = 4,
        score_threshold: float | None = None,
    ) -> None:
        self._store = store
        self._embeddings = embeddings
        self.default_k = default_k
        self.score_threshold = score_threshold

    # -- public API -----------------------------------------------------------

    def search(
        self,
        query: str,
        *,
        k: int | None = None,
        filters: list[MetadataFilter] | None = None,
    ) -> list[RetrievalResult]:
        """Embed *query* and return the nearest chunks, best first."""
        embedding = self._embeddings.embed_query(query)
        return self.search_by_embedding(embedding, k=k, filters=filters)

    def search_by_embedding(
        self,
        embedding: list[float],
        *,
        k: int | None = None,
        filters: list[MetadataFilter] | None = None,
    ) -> list[RetrievalResult]:
        """Same as :meth:`search` but accepts a pre-computed embedding."""
        k = k or self.default_k
        raw_hits = self._store.similarity_search(embedding, k=k, filters=filters)
        results = self._to_results(raw_hits)
        logger.debug("Retrieved %d results (k=%d)", len(results), k)
        return results

    def retrieve(self, query: str, k: int | None = None) -> list[tuple[str, dict[str, Any], float | None]]:
        """Return ``(content, metadata, score)`` triples for *query*."""
        return [(r.content, r.citation.metadata, r.citation.score) for r in self.search(query, k=k)]

    # -- LangChain compat -----------------------------------------------------

    def as_langchain_retriever(self, k: int | None = None) -> Any:
        """Return a LangChain ``BaseRetriever`` backed by this retriever.

        Documents carry the stored metadata, so ``metadata["source"]`` is the
        original file path.
        """
        from langchain_core.documents import Document
        from langchain_core.retrievers import BaseRetriever

        outer = self

        class _LCRetriever(BaseRetriever):
            def _get_relevant_documents(self_inner, query: str, **kwargs: Any) -> list[Document]:  # type: ignore[override]  # noqa: N805
                return [
                    Document(page_content=r.content, metadata={**r.citation.metadata, "score": r.citation.score})
                    for r in outer.search(query, k=k)
                ]

        return _LCRetriever()

    # -- internals ------------------------------------------------------------

    def _to_results(self, raw_hits: list[dict[str, Any]]) -> list[RetrievalResult]:
        results: list[RetrievalResult] = []
        for hit in raw_hits:
            score = hit.get("score")
            if self.score_threshold is not None and score is not None and score < self.score_threshold:
                continue

            meta = hit.get("metadata") or {}
            citation = Citation(
                document_id=hit.get("id"),
                source=meta.get("source", "unknown"),
                chunk_index=_as_int(meta.get("chunk_index")),
                page=_as_int(meta.get("page")),
                score=score,
                metadata=meta,
            )
            results.append(RetrievalResult(content=hit.get("content", ""), citation=citation))
        return results


def _as_int(value: Any) -> int | None:
    # Pinecone returns every number as a float.
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def open_vector_store(settings: Settings) -> VectorStoreBase:
    """Open the configured backend once; the handle is reused for the whole process."""
    if settings.vector_backend == "chroma":
        from folder_rag.retrieval.chroma_store import ChromaVectorStore

        logger.info("Using Chroma collection %r at %s:%d", settings.chroma_collection, settings.chroma_host, settings.chroma_port)
        return ChromaVectorStore(settings.chroma_collection, host=settings.chroma_host, port=settings.chroma_port)

    from folder_rag.retrieval.pinecone_store import PineconeVectorStore

    logger.info("Using Pinecone index %r", settings.pinecone_index)
    return PineconeVectorStore(
        settings.pinecone_index,
        api_key=settings.pinecone_api_key,
        namespace=settings.pinecone_namespace,
    )


def build_retriever(settings: Settings, store: VectorStoreBase, embeddings: Embeddings) -> SemanticRetriever:
    """Retriever configured from *settings* over an already-open store."""
    logger.info("Query embeddings: %s (must match the model used at index time)", settings.embedding_model)
    return SemanticRetriever(store, embeddings, default_k=settings.retrieval_k)
