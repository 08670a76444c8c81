"""Local text-to-speech capability powered by ``pyttsx3``."""

from __future__ import annotations

from cea_chat.models import VoiceDescriptor

from .interfaces import Utterance, VoiceBackendUnavailableError


def _language_tag(languages) -> str:
    """Normalize pyttsx3 language entries (``b'\\x05en-gb'``, ``'en_US'``) to a tag."""
    for language in languages or ():
        if isinstance(language, bytes):
            language = language.lstrip(b"\x00\x01\x02\x03\x04\x05\x06\x07\x08\x09").decode("utf-8", errors="ignore")
        tag = str(language).strip().replace("_", "-")
        if tag:
            return tag
    return ""


class Pyttsx3LocalSynthesizer:
    """Speaker playback using a local pyttsx3 engine instance."""

    def __init__(self, *, engine=None) -> None:
        if engine is None:
            try:
                import pyttsx3
            except ImportError as exc:  # pragma: no cover - import guard
                raise VoiceBackendUnavailableError(
                    "Local TTS backend unavailable. Install extras with: pip install 'cea-chat[voice]'"
                ) from exc
            engine = pyttsx3.init()
        self._engine = engine
        self._base_rate = self._engine.getProperty("rate") or 200

    def list_voices(self) -> list[VoiceDescriptor]:
        voices = self._engine.getProperty("voices") or []
        return [
            VoiceDescriptor(
                name=str(getattr(voice, "name", "") or ""),
                lang=_language_tag(getattr(voice, "languages", None)),
                voice_id=getattr(voice, "id", None),
            )
            for voice in voices
        ]

    def speak(self, utterance: Utterance) -> None:
        text = utterance.text.strip()
        if not text:
            return
        if utterance.voice and utterance.voice.voice_id:
            self._engine.setProperty("voice", utterance.voice.voice_id)
        # pyttsx3 has no pitch control; rate is a multiplier on the engine default.
        self._engine.setProperty("rate", int(self._base_rate * utterance.rate))
        self._engine.say(text)
        self._engine.runAndWait()
