"""
Chat — the interactive question/answer loop over a terminal.

Public API
----------
- :class:`ChatLoop` / :func:`chat` — the read → answer → print cycle.
- :class:`ChatResponse` — what an answer handler returns.
- :func:`build_rag_handler` — default handler (retrieval + streamed LLM answer).
"""

from folder_rag.chat.handlers import build_rag_handler
from folder_rag.chat.loop import ChatHandler, ChatLoop, ChatResponse, ChatState, chat

__all__ = [
    "ChatHandler",
    "ChatLoop",
    "ChatResponse",
    "ChatState",
    "build_rag_handler",
    "chat",
]
