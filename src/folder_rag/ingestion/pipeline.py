"""End-to-end write path: crawl → load → chunk → embed → upsert."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from folder_rag.config import ALLOWED_EXTENSIONS
from folder_rag.errors import DiscoveryError
from folder_rag.ingestion.chunker import chunk_documents
from folder_rag.ingestion.crawler import crawl
from folder_rag.ingestion.indexer import index_chunks
from folder_rag.ingestion.loader import load_document
from folder_rag.ingestion.runner import run_ingestion
from folder_rag.progress import NullProgress, ProgressObserver, TqdmProgress

if TYPE_CHECKING:
    from collections.abc import Callable

    from langchain_core.embeddings import Embeddings

    from folder_rag.config import Settings
    from folder_rag.retrieval.base import VectorStoreBase

logger = logging.getLogger(__name__)


@dataclass
class PipelineSummary:
    """Counts reported to the operator once the run finishes."""

    files_found: int = 0
    documents_loaded: int = 0
    chunks_created: int = 0
    chunks_indexed: int = 0
    failed_paths: list[str] = field(default_factory=list)
    discovery_error: str | None = None

    def render(self) -> str:
        lines = [
            f"Files found:      {self.files_found}",
            f"Documents loaded: {self.documents_loaded}",
            f"Chunks created:   {self.chunks_created}",
            f"Chunks indexed:   {self.chunks_indexed}",
        ]
        if self.discovery_error:
            lines.append(f"Discovery failed: {self.discovery_error}")
        if self.failed_paths:
            lines.append(f"Failed to load ({len(self.failed_paths)}):")
            lines.extend(f"  {p}" for p in self.failed_paths)
        return "\n".join(lines)


def run_indexing(
    settings: Settings,
    embeddings: Embeddings,
    store: VectorStoreBase,
    *,
    show_progress: bool = True,
) -> PipelineSummary:
    """Index every supported document under ``settings.folder_path``.

    Raises
    ------
    ConfigurationError
        ``FOLDER_PATH`` is unset; raised before anything is crawled.
    IndexingError
        A batch failed to embed or upsert.  Earlier batches stay indexed.
    """
    root = settings.require_folder_path()
    summary = PipelineSummary()
    progress: Callable[..., ProgressObserver] = TqdmProgress if show_progress else _null_progress

    logger.info("Crawling documents under %s", root)
    observer = progress("Documents crawled")
    try:
        paths = crawl(root, ALLOWED_EXTENSIONS, observer)
    except DiscoveryError as exc:
        logger.error("%s", exc)
        summary.discovery_error = str(exc)
        paths = []
    finally:
        observer.close()
    summary.files_found = len(paths)

    observer = progress("Loading", total=len(paths))
    try:
        report = run_ingestion(
            paths,
            loader=lambda path: load_document(path, unknown_policy=settings.unknown_extension_policy),
            observer=observer,
            max_workers=settings.load_workers,
        )
    finally:
        observer.close()
    summary.documents_loaded = len(report.documents)
    summary.failed_paths = list(report.failed_paths)

    chunks = chunk_documents(report.documents, settings.chunk_size, settings.chunk_overlap)
    summary.chunks_created = len(chunks)
    if not chunks:
        logger.warning("Nothing to index")
        return summary

    logger.info("Starting vectorization of %d chunks", len(chunks))
    observer = progress("Embedding", total=len(chunks))
    try:
        result = index_chunks(chunks, embeddings, store, settings.index_batch_size, observer)
    finally:
        observer.close()
    summary.chunks_indexed = result.chunks_indexed
    logger.info("Vectorization completed; chunks stored in %r", store.collection_name)
    return summary


def _null_progress(desc: str, total: int | None = None) -> ProgressObserver:
    return NullProgress()
