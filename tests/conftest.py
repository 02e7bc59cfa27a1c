"""Pytest configuration and shared fixtures."""
import asyncio
import json
import os
from collections.abc import Callable

import httpx
import pytest

from gptdesk.llm import ChatClient, OpenAIChatClient

MOCK_API_KEY = "mock_api_key"
MOCK_BASE_URL = "http://mock-openai.test/v1"


def completion_body(*contents: str) -> dict:
    """Build a chat-completion response body with one choice per content."""
    return {
        "id": "chatcmpl-mock",
        "object": "chat.completion",
        "model": "gpt-4",
        "choices": [
            {"index": i, "message": {"role": "assistant", "content": c}, "finish_reason": "stop"}
            for i, c in enumerate(contents)
        ],
    }


class RecordingEndpoint:
    """Mock chat-completions endpoint that records every request it receives."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)

    def client(self, **kwargs) -> OpenAIChatClient:
        """An OpenAIChatClient whose HTTP traffic goes to this endpoint."""
        return OpenAIChatClient(
            api_key=MOCK_API_KEY,
            base_url=MOCK_BASE_URL,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(self)),
            **kwargs
        )


@pytest.fixture
def endpoint_factory():
    """Return a factory for RecordingEndpoint instances."""
    return RecordingEndpoint


@pytest.fixture
def answering_endpoint():
    """Endpoint that always answers with a single fixed choice."""
    return RecordingEndpoint(
        lambda request: httpx.Response(200, json=completion_body("This is a mock response from GPT-4."))
    )


class GatedClient(ChatClient):
    """In-memory ChatClient whose calls finish only when the test releases them.

    Register an outcome per question with expect(); the call blocks until
    release() is called for that question.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self._gates: dict[str, asyncio.Event] = {}
        self._outcomes: dict[str, str | Exception] = {}
        self.closed = False

    @property
    def model(self) -> str:
        return "gated-model"

    def expect(self, question: str, outcome: str | Exception) -> None:
        self._gates[question] = asyncio.Event()
        self._outcomes[question] = outcome

    def release(self, question: str) -> None:
        self._gates[question].set()

    async def send_chat(self, instructions: str, user_text: str) -> str:
        self.calls.append((instructions, user_text))
        await self._gates[user_text].wait()
        outcome = self._outcomes[user_text]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def gated_client():
    return GatedClient()


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "openai": os.getenv("OPENAI_API_KEY"),
    }
