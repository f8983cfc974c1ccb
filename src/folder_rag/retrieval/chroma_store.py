"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging
from typing import Any

import chromadb

from folder_rag.retrieval.base import VectorStoreBase, build_where, flatten_metadata
from folder_rag.retrieval.models import IndexEntry, MetadataFilter

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host / port:
        Chroma server address, used when *client* is not given.
    client:
        An already-open Chroma client (e.g. ``chromadb.EphemeralClient()``).
    """

    def __init__(
        self,
        collection_name: str,
        *,
        host: str = "localhost",
        port: int = 8000,
        client: Any | None = None,
    ) -> None:
        super().__init__(collection_name)
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        self._collection = self._client.get_or_create_collection(collection_name)

    def _upsert_entries(self, ids: list[str], entries: list[IndexEntry]) -> None:
        self._collection.upsert(
            ids=ids,
            embeddings=[e.embedding for e in entries],
            documents=[e.content for e in entries],
            metadatas=[flatten_metadata(e.metadata) for e in entries],
        )

    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 4,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        results = self._collection.query(
            query_embeddings=[query_embedding],
            n_results=k,
            where=build_where(filters),
            include=["documents", "metadatas", "distances"],
        )

        hits: list[dict[str, Any]] = []
        ids = results.get("ids", [[]])[0]
        docs = results.get("documents", [[]])[0]
        metas = results.get("metadatas", [[]])[0]
        distances = results.get("distances", [[]])[0]

        for doc_id, content, meta, dist in zip(ids, docs, metas, distances):
            # Chroma returns L2 distances; convert to a 0-1 similarity score.
            hits.append(
                {
                    "id": doc_id,
                    "content": content or "",
                    "score": 1.0 / (1.0 + dist),
                    "metadata": meta or {},
                }
            )
        return hits

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False

    def delete(self, ids: list[str]) -> None:
        self._collection.delete(ids=ids)
