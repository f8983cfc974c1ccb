"""Unit tests for the chunker module."""

import string

import pytest
from langchain_core.documents import Document

from folder_rag.ingestion.chunker import chunk_documents


def _letters(n: int) -> str:
    """*n* characters with no whitespace or punctuation to split on."""
    alphabet = string.ascii_letters
    return "".join(alphabet[i % len(alphabet)] for i in range(n))


def test_chunk_documents_splits_long_text() -> None:
    """A document longer than chunk_size should be split."""
    long_text = "word " * 500  # ~2500 chars
    docs = [Document(page_content=long_text, metadata={"source": "test"})]
    chunks = chunk_documents(docs, chunk_size=256, chunk_overlap=32)
    assert len(chunks) > 1
    assert all(len(c.page_content) <= 256 for c in chunks)


def test_chunk_documents_preserves_metadata() -> None:
    """Metadata from the source document should be preserved in chunks."""
    docs = [Document(page_content=_letters(1500), metadata={"source": "test.txt", "page": 3})]
    chunks = chunk_documents(docs)
    assert all(c.metadata["source"] == "test.txt" for c in chunks)
    assert all(c.metadata["page"] == 3 for c in chunks)


def test_chunk_documents_empty_input() -> None:
    """An empty list should return an empty list."""
    assert chunk_documents([]) == []


def test_default_windows_over_1200_characters() -> None:
    text = _letters(1200)
    chunks = chunk_documents([Document(page_content=text, metadata={"source": "notes.txt"})])

    assert [c.page_content for c in chunks] == [text[0:500], text[400:900], text[800:1200]]
    assert [c.metadata["start_index"] for c in chunks] == [0, 400, 800]


def test_adjacent_chunks_overlap_by_configured_length() -> None:
    chunks = chunk_documents([Document(page_content=_letters(3000), metadata={})], 500, 100)
    for first, second in zip(chunks, chunks[1:]):
        assert first.page_content[-100:] == second.page_content[:100]


def test_short_document_is_a_single_identical_chunk() -> None:
    doc = Document(page_content="  Short text.\n", metadata={"source": "a.txt"})
    chunks = chunk_documents([doc])
    assert len(chunks) == 1
    assert chunks[0].page_content == doc.page_content
    assert chunks[0].metadata["chunk_index"] == 0
    assert chunks[0].metadata["chunk_count"] == 1


def test_chunk_count_never_below_document_count() -> None:
    docs = [
        Document(page_content="", metadata={"source": "empty.txt"}),
        Document(page_content="tiny", metadata={"source": "tiny.txt"}),
        Document(page_content=_letters(1200), metadata={"source": "long.txt"}),
        Document(page_content=" " * 600, metadata={"source": "blank.txt"}),
    ]
    chunks = chunk_documents(docs)
    assert len(chunks) >= len(docs)
    assert [c.metadata["source"] for c in chunks] == ["empty.txt", "tiny.txt"] + ["long.txt"] * 3 + ["blank.txt"]


def test_prefers_paragraph_boundaries() -> None:
    text = "A" * 300 + "\n\n" + "B" * 300
    chunks = chunk_documents([Document(page_content=text, metadata={})])
    assert [c.page_content for c in chunks] == ["A" * 300, "B" * 300]


def test_chunk_sequence_metadata_is_per_document() -> None:
    docs = [
        Document(page_content=_letters(1200), metadata={"source": "one.txt"}),
        Document(page_content=_letters(900), metadata={"source": "two.txt"}),
    ]
    chunks = chunk_documents(docs)
    one = [c.metadata for c in chunks if c.metadata["source"] == "one.txt"]
    two = [c.metadata for c in chunks if c.metadata["source"] == "two.txt"]
    assert [m["chunk_index"] for m in one] == [0, 1, 2]
    assert {m["chunk_count"] for m in one} == {3}
    assert [m["chunk_index"] for m in two] == [0, 1]


def test_parent_metadata_is_not_mutated() -> None:
    doc = Document(page_content=_letters(1200), metadata={"source": "a.txt"})
    chunk_documents([doc])
    assert doc.metadata == {"source": "a.txt"}


@pytest.mark.parametrize(("size", "overlap"), [(0, 0), (100, 100), (100, 150), (100, 0), (-5, 1)])
def test_invalid_parameters_rejected(size: int, overlap: int) -> None:
    with pytest.raises(ValueError):
        chunk_documents([Document(page_content="x", metadata={})], size, overlap)
