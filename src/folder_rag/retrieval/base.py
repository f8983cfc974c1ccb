"""Abstract base class for vector-store backends.

Adding a backend only requires subclassing :class:`VectorStoreBase` and
implementing :meth:`~VectorStoreBase._upsert_entries`,
:meth:`~VectorStoreBase.similarity_search` and
:meth:`~VectorStoreBase.health_check`.  The indexer and retriever are
backend-agnostic.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any

from folder_rag.retrieval.models import IndexEntry, MetadataFilter

_OP_MAP = {
    "eq": "$eq",
    "ne": "$ne",
    "gt": "$gt",
    "gte": "$gte",
    "lt": "$lt",
    "lte": "$lte",
    "in": "$in",
    "nin": "$nin",
}


def build_where(filters: list[MetadataFilter] | None) -> dict[str, Any] | None:
    """Convert :class:`MetadataFilter` objects to ``$op`` filter syntax.

    Chroma ``where`` clauses and Pinecone ``filter`` dicts share this shape.
    """
    if not filters:
        return None

    clauses: list[dict[str, Any]] = []
    for f in filters:
        op = _OP_MAP.get(f.operator)
        if op is None:
            raise ValueError(f"Unsupported filter operator: {f.operator!r}")
        clauses.append({f.field: {op: f.value}})

    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def flatten_metadata(metadata: dict[str, Any]) -> dict[str, str | int | float | bool]:
    """Keep scalar metadata values; stringify anything else, drop ``None``."""
    flat: dict[str, str | int | float | bool] = {}
    for key, value in metadata.items():
        if value is None:
            continue
        if isinstance(value, (str, int, float, bool)):
            flat[key] = value
        else:
            flat[key] = str(value)
    return flat


def entry_id(entry: IndexEntry) -> str:
    """Deterministic identifier: re-indexing an unchanged chunk overwrites it."""
    meta = entry.metadata
    key = "\x1f".join(
        [
            str(meta.get("source", "")),
            str(meta.get("page", "")),
            str(meta.get("chunk_index", "")),
            str(meta.get("start_index", "")),
            entry.content,
        ]
    )
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    def upsert(self, entries: list[IndexEntry]) -> list[str]:
        """Insert or overwrite *entries* in one call; return their ids."""
        if not entries:
            return []
        ids = [entry.id or entry_id(entry) for entry in entries]
        self._upsert_entries(ids, entries)
        return ids

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def _upsert_entries(self, ids: list[str], entries: list[IndexEntry]) -> None:
        """Write *entries* under *ids* in a single backend call."""
        ...

    @abstractmethod
    def similarity_search(
        self,
        query_embedding: list[float],
        *,
        k: int = 4,
        filters: list[MetadataFilter] | None = None,
    ) -> list[dict[str, Any]]:
        """Return the top-*k* results matching *query_embedding*, best first.

        Each result dict contains ``"id"``, ``"content"``, ``"score"``
        (higher = more similar) and ``"metadata"``.
        """
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- optional overrides ---------------------------------------------------

    def delete(self, ids: list[str]) -> None:
        """Delete entries by their IDs.  Optional — raises by default."""
        raise NotImplementedError(f"{type(self).__name__} does not support delete")
