"""CLI entry point: ``folder-rag index`` and ``folder-rag chat``.

Both commands take their configuration from the environment / ``.env``
(``FOLDER_PATH``, ``PINECONE_INDEX``, provider credentials, …).
"""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from folder_rag.config import Settings, load_settings
from folder_rag.errors import ConfigurationError, IndexingError
from folder_rag.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def index(settings: Settings) -> int:
    """Crawl, load, chunk, embed and store every document under FOLDER_PATH."""
    from folder_rag.ingestion.embedder import get_embedding_function
    from folder_rag.ingestion.pipeline import run_indexing
    from folder_rag.retrieval.retriever import open_vector_store

    settings.require_folder_path()
    settings.require_store_name()

    store = open_vector_store(settings)
    embeddings = get_embedding_function(settings)
    try:
        summary = run_indexing(settings, embeddings, store)
    except IndexingError as exc:
        logger.error("%s", exc)
        print(f"Indexing aborted; {exc.indexed} chunks were stored before the failure.")
        return 1

    print(summary.render())
    return 1 if summary.discovery_error else 0


def chat(settings: Settings) -> int:
    """Start the interactive question loop against an existing index."""
    from folder_rag.chat.handlers import build_rag_handler
    from folder_rag.chat.loop import ChatLoop
    from folder_rag.ingestion.embedder import get_embedding_function
    from folder_rag.llm import get_llm
    from folder_rag.retrieval.retriever import build_retriever, open_vector_store

    settings.require_store_name()

    store = open_vector_store(settings)
    retriever = build_retriever(settings, store, get_embedding_function(settings))
    handler = build_rag_handler(retriever, get_llm(settings), k=settings.retrieval_k)

    print("Ask a question about your documents (Ctrl-C to exit).")
    ChatLoop(handler).run()
    return 0


COMMANDS = {"index": index, "chat": chat}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="folder-rag",
        description="Index a folder of documents into a vector store and chat with it.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("index", help="Run crawl → load → chunk → embed → store")
    subparsers.add_parser("chat", help="Chat with an already-populated index")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as exc:
        configure_logging()
        logger.error("Invalid configuration:\n%s", exc)
        return 1

    configure_logging(settings.log_level)
    try:
        return COMMANDS[args.command](settings)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
