"""Contracts for speech recognition, synthesis and audio playback."""

from __future__ import annotations

from dataclasses import dataclass
from typing import AsyncIterator, Protocol, Union

from cea_chat.models import VoiceDescriptor


class VoiceBackendUnavailableError(RuntimeError):
    """Raised when an optional platform voice library is not installed."""


@dataclass(slots=True, frozen=True)
class RecognitionResult:
    transcript: str


@dataclass(slots=True, frozen=True)
class RecognitionError:
    error: str
    message: str = ""


@dataclass(slots=True, frozen=True)
class RecognitionEnded:
    pass


RecognitionEvent = Union[RecognitionResult, RecognitionError, RecognitionEnded]


class SpeechRecognitionCapability(Protocol):
    """Single-shot speech recognition offered by the host platform."""

    available: bool

    def listen(self) -> AsyncIterator[RecognitionEvent]:
        """Capture one utterance and yield its events, ending with ``RecognitionEnded``."""


@dataclass(slots=True, frozen=True)
class Utterance:
    text: str
    voice: VoiceDescriptor | None
    lang: str
    rate: float = 0.95
    pitch: float = 1.0


class LocalSynthesisCapability(Protocol):
    """Built-in speech synthesis engine of the host platform."""

    def list_voices(self) -> list[VoiceDescriptor]:
        """Return the voices currently known to the engine."""

    def speak(self, utterance: Utterance) -> None:
        """Vocalize the utterance."""


class AudioPlayer(Protocol):
    """Interface for a speaker/audio sink."""

    def play(self, audio_bytes: bytes) -> object:
        """Start playback of encoded audio bytes."""


class RemoteSynthesizer(Protocol):
    """Converts text into encoded audio through a remote service."""

    async def synthesize(self, text: str) -> bytes:
        """Return audio bytes for the given text, raising on any failure."""
