"""Lazily populated cache of the platform's synthetic voices."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from cea_chat.models import VoiceDescriptor

VoiceSource = Callable[[], list[VoiceDescriptor]]


class VoiceCatalog:
    """Owned voice cache refreshed through an explicit change notification.

    Platforms often report an empty list until their voices finish loading, so
    a refresh only replaces the cache when it returns something. The one-shot
    wait used by the fallback path overwrites it unconditionally.
    """

    def __init__(self, source: VoiceSource, *, logger: logging.Logger | None = None) -> None:
        self._source = source
        self._voices: list[VoiceDescriptor] = []
        self._loaded = False
        self._logger = logger or logging.getLogger("cea_chat.voice.catalog")

    @property
    def voices(self) -> list[VoiceDescriptor]:
        if not self._loaded:
            self._loaded = True
            self.refresh()
        return list(self._voices)

    def refresh(self) -> list[VoiceDescriptor]:
        found = self._query()
        if found:
            self._voices = found
            self._logger.debug("voice_catalog_refreshed", extra={"count": len(found)})
        return list(self._voices)

    def voices_changed(self) -> None:
        """Callback for platforms that signal a change in voice availability."""
        self._loaded = True
        self.refresh()

    async def wait_for_voices(self, delay_seconds: float = 0.1) -> list[VoiceDescriptor]:
        """Return cached voices, waiting once and re-querying when the cache is empty."""
        voices = self.voices
        if voices:
            return voices

        await asyncio.sleep(delay_seconds)
        self._voices = self._query()
        return list(self._voices)

    def _query(self) -> list[VoiceDescriptor]:
        try:
            return list(self._source())
        except Exception:  # noqa: BLE001 - a broken engine reads as "no voices"
            self._logger.exception("voice_catalog_query_failed")
            return []
