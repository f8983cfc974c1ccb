"""Progress observers injected into the crawl, load and indexing stages."""

from __future__ import annotations

import logging
from typing import Protocol, TextIO, runtime_checkable

from tqdm import tqdm

logger = logging.getLogger(__name__)


@runtime_checkable
class ProgressObserver(Protocol):
    """Receives incremental progress; implementations must not block."""

    def advance(self, n: int = 1) -> None: ...

    def close(self) -> None: ...


class NullProgress:
    """Observer that discards every update."""

    def advance(self, n: int = 1) -> None:
        pass

    def close(self) -> None:
        pass


class TqdmProgress:
    """Console progress bar backed by ``tqdm``.

    Parameters
    ----------
    desc:
        Label shown before the counter, e.g. ``"Documents crawled"``.
    total:
        Expected number of units, or ``None`` for an open-ended counter.
    file:
        Stream the bar is drawn on; ``None`` means stderr.
    """

    def __init__(
        self, desc: str, total: int | None = None, *, disable: bool = False, file: TextIO | None = None
    ) -> None:
        self._bar = tqdm(total=total, desc=desc, unit="", disable=disable, leave=True, file=file)

    def advance(self, n: int = 1) -> None:
        self._bar.update(n)

    def close(self) -> None:
        self._bar.close()


def notify(observer: ProgressObserver, n: int = 1) -> None:
    """Forward *n* to *observer*; observer failures are logged and ignored."""
    try:
        observer.advance(n)
    except Exception:  # noqa: BLE001
        logger.debug("Progress observer %r failed", observer, exc_info=True)
