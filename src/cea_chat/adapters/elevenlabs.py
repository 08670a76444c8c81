"""ElevenLabs text-to-speech vendor client used by the proxy route."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from cea_chat.config import Settings


@dataclass(slots=True, frozen=True)
class VoiceSettings:
    stability: float = 0.7
    similarity_boost: float = 0.7


class ElevenLabsClient:
    """Builds the single upstream synthesis request and opens its response stream."""

    def __init__(
        self,
        *,
        api_key: str | None,
        voice_id: str,
        model_id: str,
        voice_settings: VoiceSettings | None = None,
        base_url: str = "https://api.elevenlabs.io",
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._voice_id = voice_id
        self._model_id = model_id
        self._voice_settings = voice_settings or VoiceSettings()
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.AsyncClient(timeout=None)

    @classmethod
    def from_settings(cls, settings: Settings, *, http_client: httpx.AsyncClient | None = None) -> ElevenLabsClient:
        return cls(
            api_key=settings.elevenlabs_api_key,
            voice_id=settings.elevenlabs_voice_id,
            model_id=settings.elevenlabs_model_id,
            voice_settings=VoiceSettings(
                stability=settings.elevenlabs_stability,
                similarity_boost=settings.elevenlabs_similarity_boost,
            ),
            base_url=settings.elevenlabs_base_url,
            http_client=http_client,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def build_request(self, text: str) -> httpx.Request:
        return self._http.build_request(
            "POST",
            f"{self._base_url}/v1/text-to-speech/{self._voice_id}",
            headers={
                "xi-api-key": self._api_key or "",
                "Content-Type": "application/json",
                "Accept": "audio/mpeg",
            },
            json={
                "text": text,
                "model_id": self._model_id,
                "voice_settings": {
                    "stability": self._voice_settings.stability,
                    "similarity_boost": self._voice_settings.similarity_boost,
                },
            },
        )

    async def open_stream(self, text: str) -> httpx.Response:
        """Send the request and return the unread response; the caller must close it."""
        return await self._http.send(self.build_request(text), stream=True)

    async def aclose(self) -> None:
        await self._http.aclose()
