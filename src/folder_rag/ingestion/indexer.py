"""Batch embedding and upsert of chunks into the vector store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from folder_rag.errors import IndexingError
from folder_rag.progress import NullProgress, ProgressObserver, notify
from folder_rag.retrieval.models import IndexEntry

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.documents import Document
    from langchain_core.embeddings import Embeddings

    from folder_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexingSummary:
    chunks_indexed: int
    batches: int


def index_chunks(
    chunks: Sequence[Document],
    embeddings: Embeddings,
    store: VectorStoreBase,
    batch_size: int = 100,
    observer: ProgressObserver | None = None,
) -> IndexingSummary:
    """Embed and upsert *chunks* in consecutive batches of at most *batch_size*.

    Batches run strictly in order, one embedding call and one upsert call
    each.  The first failing batch raises :class:`IndexingError`; batches
    upserted before it stay in the store.

    Parameters
    ----------
    chunks:
        Chunks in crawl/document order.
    embeddings:
        Embedding function; ``embed_documents`` is called once per batch.
    store:
        Open vector-store handle, reused for every batch.
    batch_size:
        Maximum chunks per network call.
    observer:
        Advanced by the number of chunks in each committed batch.
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size ({batch_size}) must be positive")
    observer = observer or NullProgress()

    indexed = 0
    batches = 0
    for offset in range(0, len(chunks), batch_size):
        batch = chunks[offset : offset + batch_size]
        try:
            vectors = embeddings.embed_documents([c.page_content for c in batch])
            if len(vectors) != len(batch):
                raise ValueError(f"embedding returned {len(vectors)} vectors for {len(batch)} texts")
            store.upsert(
                [
                    IndexEntry(embedding=list(vec), content=c.page_content, metadata=dict(c.metadata))
                    for c, vec in zip(batch, vectors)
                ]
            )
        except Exception as exc:
            logger.error("Indexing stopped at batch offset %d", offset)
            raise IndexingError(offset, len(batch), indexed, f"{type(exc).__name__}: {exc}") from exc

        indexed += len(batch)
        batches += 1
        notify(observer, len(batch))
        logger.debug("Upserted batch %d (%d-%d)", batches, offset, offset + len(batch))

    logger.info("Indexed %d chunks in %d batches into %r", indexed, batches, store.collection_name)
    return IndexingSummary(chunks_indexed=indexed, batches=batches)
