"""Unit tests for the failure-isolating ingestion runner."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from langchain_core.documents import Document

from folder_rag.errors import LoadError
from folder_rag.ingestion.runner import IngestionReport, run_ingestion


def _loader(bad: set[str]):
    def load(path: str) -> list[Document]:
        if path in bad:
            raise LoadError(path, "corrupt")
        return [Document(page_content=f"content of {path}", metadata={"source": path})]

    return load


PATHS = [f"docs/file-{i}.txt" for i in range(6)]


def test_one_corrupt_file_is_isolated() -> None:
    report = run_ingestion(PATHS, loader=_loader({"docs/file-2.txt"}))
    assert len(report.documents) == 5
    assert report.failed_paths == ["docs/file-2.txt"]
    assert not report.ok


def test_documents_keep_input_order() -> None:
    report = run_ingestion(PATHS, loader=_loader(set()))
    assert [d.metadata["source"] for d in report.documents] == PATHS


def test_thread_pool_preserves_order() -> None:
    bad = {"docs/file-1.txt", "docs/file-4.txt"}
    report = run_ingestion(PATHS, loader=_loader(bad), max_workers=4)
    assert [d.metadata["source"] for d in report.documents] == [p for p in PATHS if p not in bad]
    assert report.failed_paths == ["docs/file-1.txt", "docs/file-4.txt"]


def test_progress_reported_per_path(progress) -> None:
    run_ingestion(PATHS, loader=_loader({"docs/file-0.txt"}), observer=progress)
    assert sum(progress.increments) == len(PATHS)


def test_failure_summary_lists_every_path(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="folder_rag"):
        run_ingestion(PATHS, loader=_loader({"docs/file-1.txt", "docs/file-3.txt"}))
    assert "docs/file-1.txt" in caplog.text
    assert "docs/file-3.txt" in caplog.text


def test_unexpected_errors_propagate() -> None:
    def explode(path: str) -> list[Document]:
        raise MemoryError("boom")

    with pytest.raises(MemoryError):
        run_ingestion(["a.txt"], loader=explode)


def test_empty_input() -> None:
    report = run_ingestion([])
    assert report == IngestionReport()


def test_real_files_with_default_loader(tmp_path: Path) -> None:
    good = tmp_path / "good.txt"
    good.write_text("fine")
    bad = tmp_path / "bad.docx"
    bad.write_text("not a zip")
    report = run_ingestion([str(good), str(bad)])
    assert [d.page_content for d in report.documents] == ["fine"]
    assert report.failed_paths == [str(bad)]
