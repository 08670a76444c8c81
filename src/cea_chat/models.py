from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(slots=True, frozen=True)
class Message:
    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(slots=True, frozen=True)
class VoiceDescriptor:
    name: str
    lang: str
    voice_id: str | None = None


@dataclass(slots=True)
class SessionState:
    """Ephemeral UI state for one chat session."""

    conversation: list[Message] = field(default_factory=list)
    input_text: str = ""
    loading: bool = False
    listening: bool = False
