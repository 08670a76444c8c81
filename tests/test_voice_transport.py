from __future__ import annotations

import asyncio
import json
import shutil
import tempfile

import httpx
import pytest

from cea_chat.voice.playback import SubprocessAudioPlayer
from cea_chat.voice.remote import ProxySpeechClient

PROXY_URL = "http://127.0.0.1:8000/api/tts"


def test_proxy_client_posts_text_and_returns_audio() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b"ID3-mp3", headers={"content-type": "audio/mpeg"})

    client = ProxySpeechClient(PROXY_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    audio = asyncio.run(client.synthesize("You did well today."))

    assert audio == b"ID3-mp3"
    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == PROXY_URL
    assert json.loads(request.content) == {"text": "You did well today."}


def test_proxy_client_raises_on_vendor_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"detail": {"status": "invalid_api_key"}})

    client = ProxySpeechClient(PROXY_URL, http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.synthesize("hello"))


def test_player_removes_temp_file_after_playback(monkeypatch, tmp_path) -> None:
    if shutil.which("sh") is None:
        pytest.skip("requires a POSIX shell")
    spool = tmp_path / "spool"
    spool.mkdir()
    played = tmp_path / "played.mp3"
    monkeypatch.setattr(tempfile, "tempdir", str(spool))

    player = SubprocessAudioPlayer(command=("sh", "-c", f'cat "$0" > "{played}"'))
    reaper = player.play(b"ID3-audio")

    assert reaper is not None
    reaper.join(timeout=10)
    assert not reaper.is_alive()
    assert played.read_bytes() == b"ID3-audio"
    assert list(spool.iterdir()) == []


def test_player_ignores_empty_audio(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))

    assert SubprocessAudioPlayer(command=("true",)).play(b"") is None
    assert list(tmp_path.iterdir()) == []


def test_player_cleans_up_when_player_cannot_start(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path))
    player = SubprocessAudioPlayer(command=("cea-chat-no-such-player",))

    with pytest.raises(OSError):
        player.play(b"ID3-audio")

    assert list(tmp_path.iterdir()) == []
