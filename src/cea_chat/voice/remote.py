"""Client for the same-origin text-to-speech proxy route."""

from __future__ import annotations

import httpx


class ProxySpeechClient:
    """POSTs ``{"text": ...}`` to the proxy and returns the audio payload."""

    def __init__(self, url: str, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._url = url
        self._http = http_client or httpx.AsyncClient(timeout=None)

    async def synthesize(self, text: str) -> bytes:
        response = await self._http.post(self._url, json={"text": text})
        response.raise_for_status()
        return response.content

    async def aclose(self) -> None:
        await self._http.aclose()
