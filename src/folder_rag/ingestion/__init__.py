"""
Ingestion — crawling, loading, chunking, and embedding into the vector store.

The write path runs ``crawl`` → ``run_ingestion`` → ``chunk_documents`` →
``index_chunks``; :func:`folder_rag.ingestion.pipeline.run_indexing` wires
them together from a :class:`~folder_rag.config.Settings` object.
"""
