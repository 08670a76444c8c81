"""Fire-and-forget playback of encoded audio through a platform player."""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

_PLAYERS: dict[str, tuple[tuple[str, ...], ...]] = {
    "Darwin": (("afplay",),),
    "Linux": (("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"), ("mpg123", "-q")),
    "Windows": (("ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"),),
}


class AudioPlaybackError(RuntimeError):
    """Raised when no audio player is available for the current platform."""


def _resolve_command() -> tuple[str, ...]:
    for candidate in _PLAYERS.get(platform.system(), _PLAYERS["Linux"]):
        if shutil.which(candidate[0]):
            return candidate
    raise AudioPlaybackError(f"No audio player found for {platform.system()} (tried afplay, ffplay, mpg123)")


@dataclass(slots=True)
class SubprocessAudioPlayer:
    """Writes the payload to a temporary file and starts a player without waiting.

    A daemon thread waits for the player and deletes the file once it exits.
    """

    command: tuple[str, ...] | None = None
    suffix: str = ".mp3"
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("cea_chat.voice.playback"))

    def play(self, audio_bytes: bytes) -> threading.Thread | None:
        if not audio_bytes:
            return None
        command = self.command or _resolve_command()
        with tempfile.NamedTemporaryFile(suffix=self.suffix, delete=False) as tmp:
            tmp.write(audio_bytes)
            path = tmp.name

        try:
            proc = subprocess.Popen([*command, path], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError:
            Path(path).unlink(missing_ok=True)
            raise
        self.logger.debug("audio_playback_started", extra={"path": path, "bytes": len(audio_bytes)})

        reaper = threading.Thread(target=self._cleanup, args=(proc, path), name="cea-playback-cleanup", daemon=True)
        reaper.start()
        return reaper

    def _cleanup(self, proc: subprocess.Popen, path: str) -> None:
        proc.wait()
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            self.logger.warning("audio_cleanup_failed", extra={"path": path, "error": str(exc)})
