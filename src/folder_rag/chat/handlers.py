"""Default answer handler: retrieve, then stream an LLM answer."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from langchain_core.output_parsers import StrOutputParser

from folder_rag.chat.loop import ChatHandler, ChatResponse
from folder_rag.chat.prompts import ANSWER_PROMPT, format_context, history_messages

if TYPE_CHECKING:
    from langchain_core.language_models import BaseChatModel

    from folder_rag.retrieval.retriever import SemanticRetriever

logger = logging.getLogger(__name__)


def build_rag_handler(
    retriever: SemanticRetriever,
    llm: BaseChatModel,
    *,
    k: int | None = None,
    history_turns: int = 5,
) -> ChatHandler:
    """Return a handler that answers from the index and remembers past turns.

    Each call retrieves *k* chunks, streams the model's answer as text
    fragments, lists the distinct source files, and (through
    ``on_answer``) appends the finished turn to the conversation history
    sent with later questions.
    """
    chain = ANSWER_PROMPT | llm | StrOutputParser()
    history: deque[tuple[str, str]] = deque(maxlen=history_turns)

    def handle(question: str) -> ChatResponse:
        results = retriever.search(question, k=k)
        logger.debug("Retrieved %d chunks for %r", len(results), question)
        stream = chain.stream(
            {
                "question": question,
                "context": format_context(results),
                "history": history_messages(list(history)),
            }
        )

        def remember(answer: str) -> None:
            history.append((question, answer))

        return ChatResponse(answer=stream, sources=unique_sources(results), on_answer=remember)

    return handle


def unique_sources(results: list) -> list[str]:
    """Source paths of *results* in rank order, without repeats."""
    return list(dict.fromkeys(r.citation.source for r in results))
