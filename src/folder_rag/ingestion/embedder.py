"""Embedding function construction."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from folder_rag.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings) -> Embeddings:
    """Return the configured embedding model.

    The same function must be used for indexing and for querying, so both
    the ``index`` and ``chat`` commands build it through here.
    """
    if settings.embedding_provider == "huggingface":
        from langchain_huggingface import HuggingFaceEmbeddings

        logger.info("Loading sentence-transformer %s", settings.embedding_model)
        return HuggingFaceEmbeddings(model_name=settings.embedding_model)

    from langchain_openai import OpenAIEmbeddings

    kwargs: dict = {"model": settings.embedding_model}
    if settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key
    return OpenAIEmbeddings(**kwargs)
