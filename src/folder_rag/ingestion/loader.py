"""Document loaders — extension dispatch onto LangChain document loaders."""

from __future__ import annotations

import enum
import logging
import os
from typing import TYPE_CHECKING, Callable

from langchain_community.document_loaders import Docx2txtLoader, PyPDFLoader, TextLoader

from folder_rag.errors import LoadError

if TYPE_CHECKING:
    from langchain_core.document_loaders import BaseLoader
    from langchain_core.documents import Document

logger = logging.getLogger(__name__)


class DocumentFormat(str, enum.Enum):
    """File formats the loader knows how to parse."""

    DOCX = "docx"
    PLAIN_TEXT = "text"
    PDF = "pdf"
    UNKNOWN = "unknown"


_EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    ".docx": DocumentFormat.DOCX,
    ".txt": DocumentFormat.PLAIN_TEXT,
    ".pdf": DocumentFormat.PDF,
}

_LOADERS: dict[DocumentFormat, Callable[[str], BaseLoader]] = {
    DocumentFormat.DOCX: Docx2txtLoader,
    DocumentFormat.PLAIN_TEXT: lambda path: TextLoader(path, encoding="utf-8", autodetect_encoding=True),
    DocumentFormat.PDF: PyPDFLoader,
}


def detect_format(path: str) -> DocumentFormat:
    """Map *path*'s extension (case-sensitive) to a :class:`DocumentFormat`."""
    return _EXTENSION_FORMATS.get(os.path.splitext(path)[1], DocumentFormat.UNKNOWN)


def load_document(path: str, *, unknown_policy: str = "docx") -> list[Document]:
    """Parse a single file into one or more documents.

    Parameters
    ----------
    path:
        File to load.  Its path is stored in every document's
        ``metadata["source"]``.
    unknown_policy:
        What to do with an unrecognised extension: ``"docx"`` parses it as
        a Word document (historical behaviour), ``"error"`` raises.

    Returns
    -------
    list[Document]
        One document for text / Word files, one per non-blank page for PDFs.

    Raises
    ------
    LoadError
        The file is empty, corrupt, unsupported, or yields no text.
    """
    fmt = detect_format(path)
    if fmt is DocumentFormat.UNKNOWN:
        if unknown_policy == "error":
            raise LoadError(path, "unsupported file extension")
        logger.debug("Unknown extension for %s, parsing as Word document", path)
        fmt = DocumentFormat.DOCX

    try:
        if os.path.getsize(path) == 0:
            raise LoadError(path, "file is empty")
        documents = _LOADERS[fmt](path).load()
    except LoadError:
        raise
    except Exception as exc:
        raise LoadError(path, f"{type(exc).__name__}: {exc}") from exc

    documents = [doc for doc in documents if doc.page_content.strip()]
    if not documents:
        raise LoadError(path, "no extractable text")

    for doc in documents:
        doc.metadata["source"] = path
        doc.metadata["file_type"] = fmt.value
    return documents
