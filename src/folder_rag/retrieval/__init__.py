"""
Retrieval — vector-store backends and semantic search with citations.

Public surface
--------------
- :class:`SemanticRetriever` — query embedding + nearest-neighbour search.
- :class:`VectorStoreBase` — abstract backend.
- :class:`PineconeVectorStore` / :class:`ChromaVectorStore` — concrete backends.
- :class:`Citation`, :class:`IndexEntry`, :class:`RetrievalResult`,
  :class:`MetadataFilter` — data models.
"""

from folder_rag.retrieval.base import VectorStoreBase
from folder_rag.retrieval.models import Citation, IndexEntry, MetadataFilter, RetrievalResult
from folder_rag.retrieval.retriever import SemanticRetriever, open_vector_store

__all__ = [
    "ChromaVectorStore",
    "Citation",
    "IndexEntry",
    "MetadataFilter",
    "PineconeVectorStore",
    "RetrievalResult",
    "SemanticRetriever",
    "VectorStoreBase",
    "open_vector_store",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import backends so chromadb / pinecone load only when used."""
    if name == "ChromaVectorStore":
        from folder_rag.retrieval.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    if name == "PineconeVectorStore":
        from folder_rag.retrieval.pinecone_store import PineconeVectorStore

        return PineconeVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
