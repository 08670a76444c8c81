"""Single-shot voice capture feeding transcripts to the chat session."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Awaitable, Callable

from .interfaces import (
    RecognitionEnded,
    RecognitionError,
    RecognitionEvent,
    RecognitionResult,
    SpeechRecognitionCapability,
)

TranscriptHandler = Callable[[str], Awaitable[None]]
ListeningListener = Callable[[bool], None]


class ListeningState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"


@dataclass(slots=True)
class UnavailableRecognition:
    """Capability variant for platforms without a recognition engine."""

    reason: str = "Speech recognition is not supported on this platform"
    available: bool = False

    async def listen(self) -> AsyncIterator[RecognitionEvent]:
        yield RecognitionEnded()


class SpeechInputAdapter:
    """Drives one recognition session at a time: idle -> listening -> idle."""

    def __init__(
        self,
        capability: SpeechRecognitionCapability,
        on_transcript: TranscriptHandler,
        *,
        on_listening_changed: ListeningListener | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._capability = capability
        self._on_transcript = on_transcript
        self._on_listening_changed = on_listening_changed
        self._logger = logger or logging.getLogger("cea_chat.voice.input")
        self._state = ListeningState.IDLE
        self._pending: set[asyncio.Task[None]] = set()

        if not capability.available:
            self._logger.warning(
                "speech_recognition_unavailable",
                extra={"reason": getattr(capability, "reason", "")},
            )

    @property
    def state(self) -> ListeningState:
        return self._state

    @property
    def listening(self) -> bool:
        return self._state == ListeningState.LISTENING

    @property
    def available(self) -> bool:
        return self._capability.available

    async def trigger(self) -> bool:
        """Run one recognition session; returns False when the trigger was ignored.

        Transcripts are handed off as soon as they arrive, so the session is back
        to idle before the auto-sent message completes. The call returns once
        both have finished.
        """
        if not self._capability.available or self.listening:
            return False

        self._transition(ListeningState.LISTENING)
        try:
            async for event in self._capability.listen():
                await self.handle_event(event)
                if not self.listening:
                    break
        finally:
            if self.listening:
                self._transition(ListeningState.IDLE)
            pending, self._pending = self._pending, set()
            if pending:
                await asyncio.gather(*pending)
        return True

    async def handle_event(self, event: RecognitionEvent) -> None:
        if isinstance(event, RecognitionResult):
            transcript = event.transcript.strip()
            self._logger.info("speech_recognized", extra={"transcript": transcript})
            self._pending.add(asyncio.create_task(self._on_transcript(transcript)))
        elif isinstance(event, RecognitionError):
            self._logger.error(
                "speech_recognition_error",
                extra={"error": event.error, "detail": event.message},
            )
            self._transition(ListeningState.IDLE)
        elif isinstance(event, RecognitionEnded):
            self._transition(ListeningState.IDLE)

    def _transition(self, state: ListeningState) -> None:
        if state == self._state:
            return
        self._state = state
        if self._on_listening_changed:
            self._on_listening_changed(state == ListeningState.LISTENING)
