"""Application settings loaded from environment variables / ``.env``.

A single :class:`Settings` instance is built at process start (see
:mod:`folder_rag.cli`) and handed to every component that needs it.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from folder_rag.errors import ConfigurationError

ALLOWED_EXTENSIONS: tuple[str, ...] = (".docx", ".txt", ".pdf")


class Settings(BaseSettings):
    """Process-wide configuration, populated from env vars or a .env file."""

    # Crawl
    folder_path: str | None = Field(default=None, description="Root folder to crawl (FOLDER_PATH)")
    unknown_extension_policy: str = Field(default="docx", pattern="^(docx|error)$")
    load_workers: int = Field(default=1, ge=1)

    # Chunking
    chunk_size: int = Field(default=500, gt=0)
    chunk_overlap: int = Field(default=100, gt=0)

    # Vector store
    vector_backend: str = Field(default="pinecone", pattern="^(pinecone|chroma)$")
    pinecone_index: str = Field(default="", description="Target Pinecone index name (PINECONE_INDEX)")
    pinecone_api_key: str = ""
    pinecone_namespace: str = ""
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_collection: str = "folder_rag"
    index_batch_size: int = Field(default=100, gt=0)

    # Embedding
    embedding_provider: str = Field(default="openai", pattern="^(openai|huggingface)$")
    embedding_model: str = "text-embedding-3-small"
    openai_api_key: str = ""

    # LLM
    llm_model_name: str = "gpt-4o-mini"
    llm_base_url: str = ""
    llm_temperature: float = 0.0
    retrieval_k: int = Field(default=4, gt=0)

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @model_validator(mode="after")
    def _check_chunking(self) -> Settings:
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be < chunk_size ({self.chunk_size})"
            )
        return self

    def require_folder_path(self) -> Path:
        """Return ``folder_path`` or raise :class:`ConfigurationError` when unset."""
        if self.folder_path is None or not self.folder_path.strip():
            raise ConfigurationError("FOLDER_PATH is not set; nothing to crawl")
        return Path(self.folder_path)

    def require_store_name(self) -> str:
        """Name of the index / collection addressed by the configured backend."""
        name = self.chroma_collection if self.vector_backend == "chroma" else self.pinecone_index
        if not name.strip():
            raise ConfigurationError(f"No {self.vector_backend} index name configured (PINECONE_INDEX)")
        return name


def load_settings(**overrides: object) -> Settings:
    """Build the settings object once; keyword overrides win over the environment."""
    return Settings(**overrides)  # type: ignore[arg-type]
