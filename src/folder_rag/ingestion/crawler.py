"""Recursive discovery of indexable files under a root folder."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from folder_rag.config import ALLOWED_EXTENSIONS
from folder_rag.errors import DiscoveryError
from folder_rag.progress import NullProgress, ProgressObserver, notify

logger = logging.getLogger(__name__)


def iter_document_paths(
    root: str | Path,
    allowed_extensions: Iterable[str] = ALLOWED_EXTENSIONS,
    observer: ProgressObserver | None = None,
) -> Iterator[str]:
    """Yield matching file paths depth-first, in name order at every level.

    A file matches when the suffix after the last ``.`` of its name is in
    *allowed_extensions* (compared case-sensitively, so ``REPORT.PDF`` is
    skipped).

    Raises
    ------
    DiscoveryError
        If *root* does not exist, is not a directory, or cannot be listed.
        Unreadable sub-directories are logged and skipped.
    """
    root = str(root)
    allowed = frozenset(allowed_extensions)
    observer = observer or NullProgress()

    if not os.path.exists(root):
        raise DiscoveryError(root, "path does not exist")
    if not os.path.isdir(root):
        raise DiscoveryError(root, "path is not a directory")

    try:
        entries = _sorted_entries(root)
    except OSError as exc:
        raise DiscoveryError(root, str(exc)) from exc

    # Reversed so that popping from the end visits entries in name order.
    stack: list[os.DirEntry[str]] = list(reversed(entries))
    while stack:
        entry = stack.pop()
        try:
            is_dir = entry.is_dir()
        except OSError:
            logger.warning("Cannot stat %s, skipping", entry.path)
            continue

        if is_dir:
            try:
                children = _sorted_entries(entry.path)
            except OSError as exc:
                logger.warning("Cannot list %s (%s), skipping", entry.path, exc)
                continue
            stack.extend(reversed(children))
        elif os.path.splitext(entry.name)[1] in allowed:
            notify(observer, 1)
            yield entry.path


def crawl(
    root: str | Path,
    allowed_extensions: Iterable[str] = ALLOWED_EXTENSIONS,
    observer: ProgressObserver | None = None,
) -> list[str]:
    """Return every matching file path below *root* as an ordered list."""
    paths = list(iter_document_paths(root, allowed_extensions, observer))
    logger.info("Found %d documents under %s", len(paths), root)
    return paths


def _sorted_entries(directory: str) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda e: e.name)
