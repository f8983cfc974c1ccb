"""folder-rag — index a folder of documents into a vector store and chat with it."""

__version__ = "0.1.0"
