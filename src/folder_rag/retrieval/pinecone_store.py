"""Pinecone implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

from pinecone import Pinecone

from folder_rag.retrieval.base import VectorStoreBase, build_where, flatten_metadata
from folder_rag.retrieval.models import IndexEntry, MetadataFilter

logger = logging.getLogger(__name__)

# Pinecone keeps only vectors + metadata, so chunk text rides in metadata.
TEXT_KEY = "text"


class PineconeVectorStore(VectorStoreBase):
    """Pinecone-backed vector store over an existing index.

    Parameters
    ----------
    index_name:
        Name of the Pinecone index; it must already exist.
    api_key:
        Pinecone API key.  Empty means ``PINECONE_API_KEY`` from the environment.
    namespace:
        Optional namespace inside the index.
    index:
        An already-open index handle, bypassing client construction.
    """

    def __init__(
        self,
        index_name: str,
        *,
        api_key: str = "",
        namespace: str = "",
        index: Any | None = None,
    ) -> None:
        super().__init__(index_name)
        if index is None:
            if not index_name:
                raise ValueError("A Pinecone index name is required (PINECONE_INDEX)")
            client = Pinecone(api_key=api_key) if api_key else Pinecone()
            index = client.Index(index_name)
        self._index = index
        self._namespace = namespace or None

    def _upsert_entries(self, ids: list[str], entries: list[IndexEntry]) -> None:
        vectors = [
            {
                "id": vid,
                "values": entry.embedding,
                "metadata": {**flatten_metadata(entry.metadata), TEXT_KEY: entry.content},
            }
            for vid, entry in zip(ids, entries)
        ]
        self._index.upsert(vectors=vectors, namespace=self._namespace)

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 4,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        response = self._index.query(
            vector=query_embedding,
            top_k=k,
            include_metadata=True,
            filter=build_where(filters),
            namespace=self._namespace,
        )

        hits: list[dict[str, Any]] = []
        for match in response.matches:
            meta = dict(match.metadata or {})
            content = meta.pop(TEXT_KEY, "")
            hits.append({"id": match.id, "content": content, "score": match.score, "metadata": meta})
        return hits

    def health_check(self) -> bool:
        try:
            self._index.describe_index_stats()
            return True
        except Exception:
            logger.warning("Pinecone health-check failed", exc_info=True)
            return False

    def delete(self, ids: list[str]) -> None:
        self._index.delete(ids=ids, namespace=self._namespace)
