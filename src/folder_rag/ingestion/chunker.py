"""Text chunking strategies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

# Paragraph, line, sentence, word, then a hard character cut.
SEPARATORS = ["\n\n", "\n", ". ", " ", ""]


def chunk_documents(
    documents: Sequence[Document],
    chunk_size: int = 500,
    chunk_overlap: int = 100,
) -> list[Document]:
    """Split *documents* into overlapping chunks for embedding.

    Parameters
    ----------
    documents:
        Source documents produced by a loader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of characters shared by consecutive chunks of one document.

    Returns
    -------
    list[Document]
        Chunks in document order.  Each carries its parent's metadata plus
        ``chunk_index``, ``chunk_count`` and ``start_index``.  A document no
        longer than *chunk_size*, or one the splitter reduces to nothing,
        becomes exactly one chunk.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size ({chunk_size}) must be positive")
    if not 0 < chunk_overlap < chunk_size:
        raise ValueError(
            f"chunk_overlap ({chunk_overlap}) must be positive and < chunk_size ({chunk_size})"
        )

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        length_function=len,
        separators=SEPARATORS,
        add_start_index=True,
    )

    chunks: list[Document] = []
    for doc in documents:
        pieces = splitter.split_documents([doc]) if len(doc.page_content) > chunk_size else []
        if not pieces:
            # Short or whitespace-only documents still yield one chunk.
            pieces = [Document(page_content=doc.page_content, metadata={**doc.metadata, "start_index": 0})]

        for idx, piece in enumerate(pieces):
            piece.metadata["chunk_index"] = idx
            piece.metadata["chunk_count"] = len(pieces)
        chunks.extend(pieces)

    logger.info("%d documents split into %d chunks", len(documents), len(chunks))
    return chunks
