"""Drive the document loader over every crawled path, isolating failures."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

from folder_rag.errors import LoadError
from folder_rag.ingestion.loader import load_document
from folder_rag.progress import NullProgress, ProgressObserver, notify

if TYPE_CHECKING:
    from collections.abc import Sequence

    from langchain_core.documents import Document

logger = logging.getLogger(__name__)

Loader = Callable[[str], "list[Document]"]


@dataclass
class IngestionReport:
    """Outcome of loading a set of paths.

    Attributes
    ----------
    documents:
        Every document produced, in input-path order.
    failed_paths:
        Paths whose loader raised :class:`LoadError`, in input-path order.
    """

    documents: list[Document] = field(default_factory=list)
    failed_paths: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed_paths

    def failure_summary(self) -> str:
        return (
            "Some documents may not have been loaded. Check for blank or corrupted "
            "documents. Paths:\n" + "\n".join(self.failed_paths)
        )


def run_ingestion(
    paths: Sequence[str],
    loader: Loader = load_document,
    observer: ProgressObserver | None = None,
    *,
    max_workers: int = 1,
) -> IngestionReport:
    """Load every path, collecting documents and the paths that failed.

    A :class:`LoadError` from one path never stops the others.  With
    ``max_workers > 1`` loads run on a thread pool, but results are still
    assembled in the order of *paths*.
    """
    observer = observer or NullProgress()
    report = IngestionReport()
    logger.info("Loading %d documents", len(paths))

    def _load(path: str) -> list[Document] | LoadError:
        try:
            result: list[Document] | LoadError = loader(path)
        except LoadError as exc:
            result = exc
        notify(observer, 1)
        return result

    if max_workers > 1 and len(paths) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            outcomes = list(pool.map(_load, paths))
    else:
        outcomes = [_load(path) for path in paths]

    for path, outcome in zip(paths, outcomes):
        if isinstance(outcome, LoadError):
            logger.debug("Load failed: %s", outcome)
            report.failed_paths.append(path)
        else:
            report.documents.extend(outcome)

    if report.failed_paths:
        logger.warning(report.failure_summary())
    logger.info(
        "Loaded %d documents from %d paths (%d failed)",
        len(report.documents),
        len(paths),
        len(report.failed_paths),
    )
    return report
