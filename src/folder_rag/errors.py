"""Exception hierarchy shared by the ingestion and chat layers."""

from __future__ import annotations


class FolderRagError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(FolderRagError):
    """Required configuration is missing or inconsistent."""


class DiscoveryError(FolderRagError):
    """The crawl root is missing, not a directory, or unreadable."""

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"Cannot crawl {root!r}: {reason}")
        self.root = root
        self.reason = reason


class LoadError(FolderRagError):
    """A single document could not be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to load {path!r}: {reason}")
        self.path = path
        self.reason = reason


class IndexingError(FolderRagError):
    """Embedding or upserting a batch failed; later batches were not attempted.

    Attributes
    ----------
    offset:
        Position of the failed batch's first chunk in the chunk sequence.
    size:
        Number of chunks in the failed batch.
    indexed:
        Chunks already committed before the failure.
    """

    def __init__(self, offset: int, size: int, indexed: int, reason: str) -> None:
        super().__init__(
            f"Batch at offset {offset} ({size} chunks) failed after {indexed} chunks were indexed: {reason}"
        )
        self.offset = offset
        self.size = size
        self.indexed = indexed
        self.reason = reason


class ChatTurnError(FolderRagError):
    """The answer handler (or response rendering) failed for one question."""

    def __init__(self, question: str, reason: str) -> None:
        super().__init__(f"Could not answer {question!r}: {reason}")
        self.question = question
        self.reason = reason
