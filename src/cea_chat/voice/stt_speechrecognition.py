"""Speech-to-text capability powered by ``speech_recognition``."""

from __future__ import annotations

import asyncio
from typing import AsyncIterator

from .interfaces import (
    RecognitionEnded,
    RecognitionError,
    RecognitionEvent,
    RecognitionResult,
    VoiceBackendUnavailableError,
)


class SpeechRecognitionEngine:
    """Capture one microphone utterance and transcribe it with Google Web Speech."""

    available = True

    def __init__(
        self,
        *,
        language: str = "en-US",
        phrase_time_limit: float = 10.0,
        timeout: float | None = None,
        adjust_noise_seconds: float = 0.2,
    ) -> None:
        try:
            import speech_recognition as sr
        except ImportError as exc:  # pragma: no cover - import guard
            raise VoiceBackendUnavailableError(
                "Voice STT backend unavailable. Install extras with: pip install 'cea-chat[voice]'"
            ) from exc
        self._sr = sr
        try:
            self._microphone = sr.Microphone()
        except (AttributeError, OSError) as exc:
            raise VoiceBackendUnavailableError(f"No usable microphone: {exc}") from exc
        self._recognizer = sr.Recognizer()
        self._language = language
        self._phrase_time_limit = phrase_time_limit
        self._timeout = timeout
        self._adjust_noise_seconds = max(0.0, adjust_noise_seconds)

    async def listen(self) -> AsyncIterator[RecognitionEvent]:
        try:
            audio = await asyncio.to_thread(self._capture)
            transcript = await asyncio.to_thread(self._recognizer.recognize_google, audio, language=self._language)
        except self._sr.WaitTimeoutError as exc:
            yield RecognitionError(error="no-speech", message=str(exc))
        except self._sr.UnknownValueError as exc:
            yield RecognitionError(error="no-match", message=str(exc))
        except self._sr.RequestError as exc:
            yield RecognitionError(error="network", message=str(exc))
        except OSError as exc:
            yield RecognitionError(error="audio-capture", message=str(exc))
        except Exception as exc:  # noqa: BLE001
            yield RecognitionError(error=type(exc).__name__, message=str(exc))
        else:
            yield RecognitionResult(transcript=str(transcript))
        yield RecognitionEnded()

    def _capture(self):
        with self._microphone as source:
            if self._adjust_noise_seconds > 0:
                self._recognizer.adjust_for_ambient_noise(source, duration=self._adjust_noise_seconds)
            return self._recognizer.listen(
                source,
                timeout=self._timeout,
                phrase_time_limit=self._phrase_time_limit,
            )
