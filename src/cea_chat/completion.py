"""Client for an OpenAI-compatible chat-completion endpoint."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx

from cea_chat.models import Message, Role


class CompletionError(RuntimeError):
    """Base class for failed completion calls."""


class MalformedCompletionError(CompletionError):
    """Raised when the vendor response carries no usable first choice."""

    def __init__(self, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.payload = payload


class CompletionTransportError(CompletionError):
    """Raised when the request could not be delivered or returned a non-2xx status."""


class CompletionClient:
    """Sends the running transcript and returns the assistant's next turn.

    One request per call: no retries and no timeout, matching a single
    best-effort attempt.
    """

    def __init__(
        self,
        *,
        url: str,
        model: str,
        api_key: str | None,
        http_client: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._url = url
        self._model = model
        self._api_key = api_key
        self._http = http_client or httpx.AsyncClient(timeout=None)
        self._logger = logger or logging.getLogger("cea_chat.completion")

    async def complete(self, messages: Sequence[Message]) -> Message:
        payload = {
            "model": self._model,
            "messages": [message.to_payload() for message in messages],
        }
        headers = {
            "Authorization": f"Bearer {self._api_key or ''}",
            "Content-Type": "application/json",
        }

        self._logger.info("completion_requested", extra={"model": self._model, "messages": len(messages)})
        try:
            response = await self._http.post(self._url, json=payload, headers=headers)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            raise CompletionTransportError(f"{type(exc).__name__}: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedCompletionError("Completion response is not JSON") from exc

        return self._extract_reply(data)

    async def aclose(self) -> None:
        await self._http.aclose()

    @staticmethod
    def _extract_reply(data: Any) -> Message:
        choices = data.get("choices") if isinstance(data, dict) else None
        if not choices or not isinstance(choices, list):
            raise MalformedCompletionError("Completion response has no choices", payload=data)

        message = choices[0].get("message") if isinstance(choices[0], dict) else None
        if not isinstance(message, dict) or "content" not in message:
            raise MalformedCompletionError("First choice carries no message", payload=data)

        if (message.get("role") or Role.ASSISTANT.value) != Role.ASSISTANT.value:
            raise MalformedCompletionError(f"Reply role is not assistant: {message.get('role')!r}", payload=data)
        return Message(role=Role.ASSISTANT, content=str(message.get("content") or ""))
