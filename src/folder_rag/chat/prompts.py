"""Prompt template for the default answer handler."""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_core.messages import AIMessage, HumanMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

if TYPE_CHECKING:
    from langchain_core.messages import BaseMessage

    from folder_rag.retrieval.models import RetrievalResult

SYSTEM_PROMPT = """\
You are a helpful assistant answering questions about the user's documents.
Use only the provided context. If the context does not contain the answer,
say that you do not know. Keep answers concise."""

ANSWER_PROMPT = ChatPromptTemplate.from_messages(
    [
        ("system", SYSTEM_PROMPT),
        MessagesPlaceholder("history"),
        ("human", "Context:\n{context}\n\nQuestion: {question}"),
    ]
)


def format_context(results: list[RetrievalResult]) -> str:
    """Numbered listing of retrieved chunks, each headed by its ``[source§chunk]`` reference."""
    if not results:
        return "(no matching documents)"
    parts = [f"[{i}] {r.citation.short_ref()}\n{r.content}" for i, r in enumerate(results, 1)]
    return "\n\n---\n\n".join(parts)


def history_messages(turns: list[tuple[str, str]]) -> list[BaseMessage]:
    messages: list[BaseMessage] = []
    for question, answer in turns:
        messages.append(HumanMessage(content=question))
        messages.append(AIMessage(content=answer))
    return messages
