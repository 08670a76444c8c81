"""Spoken replies: remote synthesis first, local platform voices as fallback."""

from __future__ import annotations

import asyncio
import logging
import re
from enum import Enum
from typing import Sequence

from cea_chat.models import VoiceDescriptor

from .catalog import VoiceCatalog
from .interfaces import AudioPlayer, LocalSynthesisCapability, RemoteSynthesizer, Utterance

PREFERRED_VOICES: tuple[str, ...] = (
    # Chrome / Edge
    "Google UK English Female",
    "Google US English Female",
    # macOS
    "Samantha",
    "Victoria",
    # Windows
    "Microsoft Zira",
    "Microsoft Susan",
    # Generic
    "Karen",
    "Anna",
    "Amelia",
)

_FEMALE_RE = re.compile(r"female|woman", re.IGNORECASE)

DEFAULT_LANG = "en-US"
SPEECH_RATE = 0.95
SPEECH_PITCH = 1.0


class SpeechOutcome(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"
    NO_VOICE = "no_voice"


def select_voice(
    voices: Sequence[VoiceDescriptor],
    preferred: Sequence[str] = PREFERRED_VOICES,
) -> VoiceDescriptor | None:
    """Pick a preferred voice, else a female-sounding one, else the first one."""
    for voice in voices:
        if any(name in voice.name for name in preferred):
            return voice
    for voice in voices:
        if _FEMALE_RE.search(voice.name):
            return voice
    return voices[0] if voices else None


class SpeechOutputAdapter:
    """Vocalizes assistant replies with exactly one attempt per path.

    Local speech runs in a background task so the caller is not held for the
    length of the utterance. Utterances are spoken one at a time, and
    :meth:`drain` waits for whatever is still queued.
    """

    def __init__(
        self,
        *,
        remote: RemoteSynthesizer,
        player: AudioPlayer,
        local: LocalSynthesisCapability,
        catalog: VoiceCatalog,
        voice_wait_seconds: float = 0.1,
        logger: logging.Logger | None = None,
    ) -> None:
        self._remote = remote
        self._player = player
        self._local = local
        self._catalog = catalog
        self._voice_wait_seconds = voice_wait_seconds
        self._logger = logger or logging.getLogger("cea_chat.voice.output")
        self._pending: set[asyncio.Task] = set()
        self._local_lock = asyncio.Lock()

    @property
    def catalog(self) -> VoiceCatalog:
        return self._catalog

    async def speak(self, text: str) -> SpeechOutcome:
        try:
            audio = await self._remote.synthesize(text)
            self._player.play(audio)
            return SpeechOutcome.REMOTE
        except Exception as exc:  # noqa: BLE001 - every remote failure diverts to local synthesis
            self._logger.warning("tts_remote_failed", extra={"error": f"{type(exc).__name__}: {exc}"})

        return await self._speak_locally(text)

    async def _speak_locally(self, text: str) -> SpeechOutcome:
        voices = await self._catalog.wait_for_voices(self._voice_wait_seconds)
        voice = select_voice(voices)
        if voice is None:
            self._logger.warning("tts_no_voice_available")
            return SpeechOutcome.NO_VOICE

        utterance = Utterance(
            text=text,
            voice=voice,
            lang=voice.lang or DEFAULT_LANG,
            rate=SPEECH_RATE,
            pitch=SPEECH_PITCH,
        )
        self._logger.info("tts_local_speaking", extra={"voice": voice.name, "lang": utterance.lang})
        task = asyncio.create_task(self._run_local(utterance))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return SpeechOutcome.LOCAL

    async def drain(self) -> None:
        """Wait until every scheduled local utterance has been spoken."""
        while self._pending:
            await asyncio.gather(*self._pending)

    async def _run_local(self, utterance: Utterance) -> None:
        async with self._local_lock:
            try:
                await asyncio.to_thread(self._local.speak, utterance)
            except Exception as exc:  # noqa: BLE001
                self._logger.warning("tts_local_failed", extra={"error": f"{type(exc).__name__}: {exc}"})


class UnavailableSynthesis:
    """Local synthesis variant for hosts without a speech engine."""

    def list_voices(self) -> list[VoiceDescriptor]:
        return []

    def speak(self, utterance: Utterance) -> None:
        return None
