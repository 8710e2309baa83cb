"""In-memory conversation context."""

from __future__ import annotations

from typing import Protocol

from passthru.core.types import ContextEntry


class ContextSink(Protocol):
    """Append-only conversation context the router writes to."""

    def append(self, entry: ContextEntry) -> None: ...


class ConversationTape:
    """Append-only conversation record consulted by the model across turns.

    Messages keep the order they were appended in. Nothing is deduplicated,
    edited, removed or written to disk.
    """

    def __init__(self) -> None:
        self._messages: list[dict[str, str]] = []

    def append(self, entry: ContextEntry) -> None:
        self._messages.append(entry.as_message())

    def record_user(self, text: str) -> None:
        self._messages.append({"role": "user", "content": text})

    def messages(self) -> list[dict[str, str]]:
        return [dict(message) for message in self._messages]

    def entries(self) -> list[ContextEntry]:
        return [
            ContextEntry(content=message["content"], role=message["role"])
            for message in self._messages
            if message["role"] == "system"
        ]

    def __len__(self) -> int:
        return len(self._messages)
