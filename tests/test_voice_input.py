from __future__ import annotations

import asyncio

from cea_chat.voice.input import ListeningState, SpeechInputAdapter, UnavailableRecognition
from cea_chat.voice.interfaces import RecognitionEnded, RecognitionError, RecognitionResult


class ScriptedRecognition:
    available = True

    def __init__(self, *events) -> None:
        self.events = events
        self.sessions = 0

    async def listen(self):
        self.sessions += 1
        for event in self.events:
            yield event


class GatedRecognition:
    available = True

    def __init__(self) -> None:
        self.gate = asyncio.Event()
        self.sessions = 0

    async def listen(self):
        self.sessions += 1
        await self.gate.wait()
        yield RecognitionResult(transcript="hello")
        yield RecognitionEnded()


def test_transcript_is_auto_sent_and_state_returns_to_idle() -> None:
    recognition = ScriptedRecognition(RecognitionResult(transcript="  I feel anxious today "), RecognitionEnded())
    received: list[tuple[str, ListeningState]] = []
    transitions: list[bool] = []
    adapter: SpeechInputAdapter

    async def on_transcript(text: str) -> None:
        received.append((text, adapter.state))

    adapter = SpeechInputAdapter(recognition, on_transcript, on_listening_changed=transitions.append)

    assert adapter.state == ListeningState.IDLE
    assert asyncio.run(adapter.trigger()) is True

    assert received == [("I feel anxious today", ListeningState.IDLE)]
    assert transitions == [True, False]
    assert adapter.state == ListeningState.IDLE


def test_second_trigger_while_listening_is_ignored() -> None:
    async def _run():
        recognition = GatedRecognition()
        received: list[str] = []

        async def on_transcript(text: str) -> None:
            received.append(text)

        adapter = SpeechInputAdapter(recognition, on_transcript)
        first = asyncio.create_task(adapter.trigger())
        await asyncio.sleep(0)
        listening_before = adapter.listening
        second = await adapter.trigger()
        recognition.gate.set()
        first_result = await first
        return listening_before, second, first_result, recognition.sessions, received, adapter.listening

    listening_before, second, first_result, sessions, received, listening_after = asyncio.run(_run())

    assert listening_before is True
    assert second is False
    assert first_result is True
    assert sessions == 1
    assert received == ["hello"]
    assert listening_after is False


def test_recognition_error_resets_state_and_is_only_logged(caplog) -> None:
    recognition = ScriptedRecognition(RecognitionError(error="no-speech", message="timeout"), RecognitionEnded())
    received: list[str] = []

    async def on_transcript(text: str) -> None:
        received.append(text)

    adapter = SpeechInputAdapter(recognition, on_transcript)

    assert asyncio.run(adapter.trigger()) is True
    assert adapter.state == ListeningState.IDLE
    assert received == []
    assert "speech_recognition_error" in caplog.messages


def test_missing_recognition_engine_is_inert_and_logged_once(caplog) -> None:
    async def on_transcript(text: str) -> None:  # pragma: no cover - never called
        raise AssertionError("should not be called")

    adapter = SpeechInputAdapter(UnavailableRecognition(), on_transcript)

    assert asyncio.run(adapter.trigger()) is False
    assert asyncio.run(adapter.trigger()) is False
    assert adapter.available is False
    assert adapter.state == ListeningState.IDLE
    assert caplog.messages.count("speech_recognition_unavailable") == 1
