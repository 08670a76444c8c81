"""Chat session orchestration: conversation, completion and speech."""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from cea_chat.completion import CompletionClient, CompletionTransportError, MalformedCompletionError
from cea_chat.conversation import ConversationStore
from cea_chat.models import Message, Role, SessionState

NO_REPLY_ALERT = "Oops! The AI couldn't respond. Try again later."
NETWORK_ALERT = "Network or server error. Please check your API key or connection."

StateListener = Callable[[SessionState], None]


class Notifier(Protocol):
    """Blocking, user-visible alert surface."""

    def alert(self, message: str) -> None: ...


class SpeechSink(Protocol):
    async def speak(self, text: str) -> object: ...


class ListeningTrigger(Protocol):
    available: bool

    async def trigger(self) -> bool: ...


class ChatSession:
    """Owns the UI state of one conversation and reacts to user actions."""

    def __init__(
        self,
        *,
        store: ConversationStore,
        client: CompletionClient,
        notifier: Notifier,
        speech_output: SpeechSink | None = None,
        on_state_changed: StateListener | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._notifier = notifier
        self._speech_output = speech_output
        self._on_state_changed = on_state_changed
        self._speech_input: ListeningTrigger | None = None
        self._logger = logger or logging.getLogger("cea_chat.session")
        self._state = SessionState(conversation=store.transcript)
        store.subscribe(self._sync_conversation)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def store(self) -> ConversationStore:
        return self._store

    def attach_speech_input(self, speech_input: ListeningTrigger) -> None:
        self._speech_input = speech_input

    def set_input(self, text: str) -> None:
        self._state.input_text = text
        self._notify()

    def set_listening(self, listening: bool) -> None:
        self._state.listening = listening
        self._notify()

    async def start_listening(self) -> bool:
        """Voice-input control; inert when no recognition capability is attached."""
        if self._speech_input is None or not self._speech_input.available:
            return False
        return await self._speech_input.trigger()

    async def handle_transcript(self, transcript: str) -> None:
        self.set_input(transcript)
        await self.send_message(transcript)

    async def send_message(self, override_input: str | None = None) -> Message | None:
        """Send the pending input (or ``override_input``) and append the exchange.

        Returns the assistant reply, or None when nothing was sent or the
        completion failed.
        """
        text = override_input or self._state.input_text
        if not text.strip():
            return None

        self._set_loading(True)
        reply: Message | None = None
        try:
            user_message = Message(role=Role.USER, content=text)
            reply = await self._client.complete([*self._store.transcript, user_message])
            self._store.append(user_message, reply)
            self._state.input_text = ""
        except MalformedCompletionError as exc:
            self._logger.error("completion_unexpected_response", extra={"payload": exc.payload})
            self._notifier.alert(NO_REPLY_ALERT)
        except CompletionTransportError:
            self._logger.exception("completion_failed")
            self._notifier.alert(NETWORK_ALERT)
        finally:
            self._set_loading(False)

        if reply is not None:
            await self._speak(reply.content)
        return reply

    async def _speak(self, text: str) -> None:
        if self._speech_output is None:
            return
        try:
            await self._speech_output.speak(text)
        except Exception:  # noqa: BLE001 - speech never takes the session down
            self._logger.exception("speech_output_failed")

    def _set_loading(self, loading: bool) -> None:
        self._state.loading = loading
        self._notify()

    def _sync_conversation(self, _visible: list[Message]) -> None:
        self._state.conversation = self._store.transcript
        self._notify()

    def _notify(self) -> None:
        if self._on_state_changed:
            self._on_state_changed(self._state)
