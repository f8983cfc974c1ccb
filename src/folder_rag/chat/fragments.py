"""Tagged variants for the pieces of a streamed answer."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from langchain_core.messages import BaseMessage


@dataclass(frozen=True)
class TextFragment:
    """Plain text, echoed as-is."""

    text: str


@dataclass(frozen=True)
class AnswerFragment:
    """Text from a structured ``{"answer": ...}`` chunk."""

    text: str


@dataclass(frozen=True)
class ContextFragment:
    """Retrieved records from a structured ``{"context": [...]}`` chunk."""

    sources: tuple[str, ...]


@dataclass(frozen=True)
class RawFragment:
    """Any other structured chunk, echoed as JSON."""

    payload: dict[str, Any]


Fragment = Union[TextFragment, AnswerFragment, ContextFragment, RawFragment]


def classify_fragment(raw: Any) -> Fragment | None:
    """Turn one item of an answer stream into a :class:`Fragment`.

    Strings and message chunks become :class:`TextFragment`.  Mappings are
    inspected for an ``answer`` key, then a ``context`` key; any other
    mapping (e.g. a chain's echoed ``input``) becomes a :class:`RawFragment`.
    Anything else returns ``None``.
    """
    if isinstance(raw, str):
        return TextFragment(raw)
    if isinstance(raw, BaseMessage):
        return TextFragment(raw.content if isinstance(raw.content, str) else str(raw.content))
    if isinstance(raw, Mapping):
        if raw.get("answer") is not None:
            return AnswerFragment(str(raw["answer"]))
        if raw.get("context"):
            return ContextFragment(tuple(source_of(record) for record in raw["context"]))
        return RawFragment(dict(raw))
    return None


def source_of(record: Any) -> str:
    """``metadata["source"]`` of a Document-like object or dict."""
    metadata = getattr(record, "metadata", None)
    if metadata is None and isinstance(record, Mapping):
        metadata = record.get("metadata", record)
    return str((metadata or {}).get("source", "unknown"))
