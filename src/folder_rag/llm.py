"""LLM initialisation — single place to swap providers.

``LLM_BASE_URL`` points the client at any OpenAI-compatible endpoint
(vLLM, Ollama, …) instead of the OpenAI cloud.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import ChatOpenAI

if TYPE_CHECKING:
    from folder_rag.config import Settings

logger = logging.getLogger(__name__)


def get_llm(settings: Settings) -> ChatOpenAI:
    """Return the configured chat model, streaming enabled."""
    kwargs: dict = {
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
        "streaming": True,
    }

    if settings.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", settings.llm_base_url)
        kwargs["base_url"] = settings.llm_base_url
        # Local servers ignore the key; the client requires a non-empty value.
        kwargs["api_key"] = settings.openai_api_key or "EMPTY"
    elif settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key

    return ChatOpenAI(**kwargs)
