"""Domain models for index entries, retrieval results and citations."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class MetadataFilter(BaseModel):
    """Declarative metadata filter for vector-store queries.

    Attributes
    ----------
    field:
        The metadata key to filter on (e.g. ``"source"``, ``"file_type"``).
    operator:
        Comparison operator — one of ``eq``, ``ne``, ``gt``, ``gte``,
        ``lt``, ``lte``, ``in``, ``nin``.
    value:
        The value (or list of values for ``in`` / ``nin``) to compare against.
    """

    field: str
    operator: str = "eq"
    value: Any = None

    @classmethod
    def equals(cls, field: str, value: Any) -> MetadataFilter:
        return cls(field=field, operator="eq", value=value)

    @classmethod
    def one_of(cls, field: str, values: list[Any]) -> MetadataFilter:
        return cls(field=field, operator="in", value=values)


class IndexEntry(BaseModel):
    """One persisted (vector, text, metadata) triple.

    ``id`` is left as ``None`` by the indexer; the store assigns it.
    """

    embedding: list[float]
    content: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    id: str | None = None


class Citation(BaseModel):
    """Provenance of a retrieved chunk.

    Attributes
    ----------
    document_id:
        The vector-store ID of the chunk (``None`` when unknown).
    source:
        Path of the file the chunk was cut from.
    chunk_index:
        Ordinal position of the chunk within its source document.
    page:
        Page number for PDF sources.
    score:
        Similarity score returned by the vector store (higher = closer).
    metadata:
        The full metadata stored with the chunk.
    """

    document_id: str | None = None
    source: str = "unknown"
    chunk_index: int | None = None
    page: int | None = None
    score: float | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def short_ref(self) -> str:
        """Return a compact ``[source§chunk]`` reference string."""
        chunk = self.chunk_index if self.chunk_index is not None else "?"
        return f"[{self.source}§{chunk}]"


class RetrievalResult(BaseModel):
    """A single retrieved passage together with its citation."""

    content: str
    citation: Citation
