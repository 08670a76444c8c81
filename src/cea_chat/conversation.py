"""Append-only, role-tagged conversation log."""

from __future__ import annotations

import logging
from typing import Callable

from cea_chat.models import Message, Role

ConversationListener = Callable[[list[Message]], None]


class ConversationStore:
    """Ordered message log seeded with a system prompt.

    The first entry is always the system message; renderers only ever see the
    entries after it. Appends are atomic and notify every listener once.
    """

    def __init__(self, system_prompt: str, *, logger: logging.Logger | None = None) -> None:
        self._messages: list[Message] = [Message(role=Role.SYSTEM, content=system_prompt)]
        self._listeners: list[ConversationListener] = []
        self._logger = logger or logging.getLogger("cea_chat.conversation")

    @property
    def transcript(self) -> list[Message]:
        """Full ordered sequence including the system prompt."""
        return list(self._messages)

    def visible(self) -> list[Message]:
        return self._messages[1:]

    def subscribe(self, listener: ConversationListener) -> None:
        self._listeners.append(listener)

    def append(self, *messages: Message) -> None:
        """Append one or two messages as a single update."""
        if not 1 <= len(messages) <= 2:
            raise ValueError(f"Expected one or two messages per append, got {len(messages)}")
        if any(message.role == Role.SYSTEM for message in messages):
            raise ValueError("The system prompt is seeded once and cannot be appended")

        self._messages = [*self._messages, *messages]
        self._logger.debug("conversation_appended", extra={"count": len(messages), "size": len(self._messages)})
        visible = self.visible()
        for listener in self._listeners:
            listener(visible)

    def __len__(self) -> int:
        return len(self._messages)
