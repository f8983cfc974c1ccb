"""Interactive read → answer → print loop over a terminal.

The loop cycles ``AWAITING_INPUT → DISPATCHING → RESPONDING`` until the
user interrupts it (Ctrl-C / Ctrl-D), which moves it to ``CANCELLED`` and
returns normally.  A failing turn is reported and the loop keeps going.
"""

from __future__ import annotations

import enum
import json
import logging
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, TextIO

from langchain_core.messages import BaseMessage

from folder_rag.chat.fragments import (
    AnswerFragment,
    ContextFragment,
    RawFragment,
    TextFragment,
    classify_fragment,
)
from folder_rag.errors import ChatTurnError

logger = logging.getLogger(__name__)

PROMPT = "Human: "
FAREWELL = "Exit from chat."


@dataclass
class ChatResponse:
    """What an answer handler returns for one question.

    Attributes
    ----------
    answer:
        A complete string, a LangChain message, or an iterable of fragments
        (strings or ``{"answer": ...}`` / ``{"context": [...]}`` dicts)
        printed as they arrive.
    sources:
        Citations printed after the answer.
    on_answer:
        Called with the full answer text once it has been printed.
    """

    answer: Any
    sources: list[str] | None = None
    on_answer: Callable[[str], None] | None = None


ChatHandler = Callable[[str], ChatResponse]


class ChatState(str, enum.Enum):
    AWAITING_INPUT = "awaiting_input"
    DISPATCHING = "dispatching"
    RESPONDING = "responding"
    CANCELLED = "cancelled"


@dataclass
class _Writer:
    out: TextIO
    at_line_start: bool = field(default=True)

    def write(self, text: str) -> None:
        if not text:
            return
        self.out.write(text)
        self.out.flush()
        self.at_line_start = text.endswith("\n")

    def end_line(self) -> None:
        if not self.at_line_start:
            self.write("\n")

    def line(self, text: str) -> None:
        self.end_line()
        self.write(text + "\n")


class ChatLoop:
    """Terminal chat session around a pluggable answer handler.

    Parameters
    ----------
    handler:
        Called with each question; see :class:`ChatResponse`.
    input_fn:
        Reads one line given a prompt.  Raising ``KeyboardInterrupt`` or
        ``EOFError`` ends the session.
    output / error_output:
        Streams for answers and for per-turn error reports.
    """

    def __init__(
        self,
        handler: ChatHandler,
        *,
        input_fn: Callable[[str], str] = input,
        output: TextIO | None = None,
        error_output: TextIO | None = None,
    ) -> None:
        self._handler = handler
        self._input = input_fn
        self._out = _Writer(output or sys.stdout)
        self._err = error_output or sys.stderr
        self.state = ChatState.AWAITING_INPUT
        self.turns = 0

    def run(self) -> None:
        """Loop until cancelled."""
        while self.state is not ChatState.CANCELLED:
            try:
                self._turn()
            except (KeyboardInterrupt, EOFError):
                self.state = ChatState.CANCELLED
                self._out.write("\n")
                self._out.line(FAREWELL)
            except ChatTurnError as exc:
                logger.debug("Chat turn failed", exc_info=True)
                self._out.end_line()
                self._err.write(f"Error: {exc}\n")
                self._err.flush()
                self.state = ChatState.AWAITING_INPUT

    def _turn(self) -> None:
        self.state = ChatState.AWAITING_INPUT
        question = self._input(PROMPT)
        if not question.strip():
            return

        self.state = ChatState.DISPATCHING
        try:
            response = self._handler(question)
            if not isinstance(response, ChatResponse):
                response = ChatResponse(answer=response)

            self.state = ChatState.RESPONDING
            answer_text = self._respond(response.answer)
            if response.sources:
                self._out.line("Sources:\n" + "\n".join(response.sources))
            if response.on_answer is not None:
                response.on_answer(answer_text)
        except (KeyboardInterrupt, EOFError):
            raise
        except Exception as exc:
            raise ChatTurnError(question, f"{type(exc).__name__}: {exc}") from exc

        self.turns += 1

    def _respond(self, answer: Any) -> str:
        if isinstance(answer, str):
            self._out.line(f"AI: {answer.lstrip()}")
            return answer
        if isinstance(answer, BaseMessage):
            text = answer.content if isinstance(answer.content, str) else str(answer.content)
            self._out.line(f"AI: {text.lstrip()}")
            return text
        if isinstance(answer, Iterable) and not isinstance(answer, Mapping):
            return self._stream(answer)
        self._out.line(f"AI: {json.dumps(answer, default=str)}")
        return ""

    def _stream(self, fragments: Iterable[Any]) -> str:
        parts: list[str] = []
        answer_labelled = False
        self._out.write("AI: ")
        try:
            for raw in fragments:
                fragment = classify_fragment(raw)
                if isinstance(fragment, TextFragment):
                    self._out.write(fragment.text)
                    parts.append(fragment.text)
                elif isinstance(fragment, AnswerFragment):
                    if not answer_labelled:
                        self._out.write("Answer: ")
                        answer_labelled = True
                    self._out.write(fragment.text)
                    parts.append(fragment.text)
                elif isinstance(fragment, ContextFragment):
                    self._out.line("Sources:\n" + "\n".join(fragment.sources))
                elif isinstance(fragment, RawFragment):
                    self._out.line(json.dumps(fragment.payload, default=str))
                else:
                    logger.debug("Ignoring stream item %r", raw)
        finally:
            close = getattr(fragments, "close", None)
            if callable(close):
                close()
        self._out.end_line()
        return "".join(parts)


def chat(handler: ChatHandler, **kwargs: Any) -> None:
    """Run a :class:`ChatLoop` on the terminal until the user exits."""
    ChatLoop(handler, **kwargs).run()
