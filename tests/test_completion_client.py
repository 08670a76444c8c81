from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from cea_chat.completion import CompletionClient, CompletionTransportError, MalformedCompletionError
from cea_chat.models import Message, Role

URL = "https://llm.test/openai/v1/chat/completions"


def _client(handler) -> CompletionClient:
    return CompletionClient(
        url=URL,
        model="test-model",
        api_key="sk-test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


TRANSCRIPT = [
    Message(role=Role.SYSTEM, content="You are Cea."),
    Message(role=Role.USER, content="I feel anxious today"),
]


def test_complete_sends_full_transcript_and_returns_first_choice() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"choices": [{"message": {"role": "assistant", "content": "I'm here for you."}}]},
        )

    reply = asyncio.run(_client(handler).complete(TRANSCRIPT))

    assert reply == Message(role=Role.ASSISTANT, content="I'm here for you.")
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == URL
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert json.loads(request.content) == {
        "model": "test-model",
        "messages": [
            {"role": "system", "content": "You are Cea."},
            {"role": "user", "content": "I feel anxious today"},
        ],
    }


@pytest.mark.parametrize(
    "payload",
    [
        {"error": {"message": "rate limited"}},
        {"choices": []},
        {"choices": [{"finish_reason": "stop"}]},
        {"choices": [{"message": {"role": "narrator", "content": "?"}}]},
        {"choices": [{"message": {"role": "system", "content": "hi"}}]},
        {"choices": [{"message": {"role": "user", "content": "hi"}}]},
    ],
)
def test_complete_rejects_malformed_bodies(payload) -> None:
    client = _client(lambda request: httpx.Response(200, json=payload))

    with pytest.raises(MalformedCompletionError) as excinfo:
        asyncio.run(client.complete(TRANSCRIPT))

    assert excinfo.value.payload == payload


def test_complete_rejects_non_json_body() -> None:
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(MalformedCompletionError):
        asyncio.run(client.complete(TRANSCRIPT))


def test_complete_wraps_network_and_status_failures() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(CompletionTransportError, match="ConnectError"):
        asyncio.run(_client(refuse).complete(TRANSCRIPT))

    unauthorized = _client(lambda request: httpx.Response(401, json={"error": "invalid api key"}))
    with pytest.raises(CompletionTransportError, match="401"):
        asyncio.run(unauthorized.complete(TRANSCRIPT))


def test_complete_wraps_request_build_failures() -> None:
    def never_called(request: httpx.Request) -> httpx.Response:  # pragma: no cover - request is never built
        raise AssertionError("request should not be sent")

    client = CompletionClient(
        url=URL,
        model="test-model",
        api_key="clé-non-ascii",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(never_called)),
    )

    with pytest.raises(CompletionTransportError, match="UnicodeEncodeError"):
        asyncio.run(client.complete(TRANSCRIPT))
