from typing import Any

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from ..base import ChatClient
from ..errors import (
    MalformedResponseError,
    RequestTimeoutError,
    TransportError,
    UpstreamStatusError,
)
from ..models import ChatRequest, ChatResponse

DEFAULT_MODEL = "gpt-4"
DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_TIMEOUT = 60.0


def _status_detail(error: openai.APIStatusError) -> str:
    """Pull the most useful message out of an error response."""
    body = error.body
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    text = error.response.text.strip()
    return text or error.response.reason_phrase or "no detail"


class OpenAIChatClient(ChatClient):
    """Chat client for the OpenAI chat-completions endpoint.

    Hidden design decisions:
    - OpenAI SDK client initialization (no retries, fixed timeout)
    - Bearer token authentication
    - Parsing the raw body into ChatResponse instead of the SDK types,
      so a missing or empty choices list is reported rather than guessed at
    - Translation of SDK exceptions into ChatError subclasses
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str | None = DEFAULT_BASE_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        **client_kwargs: Any
    ):
        """Initialize the client.

        Args:
            api_key: OpenAI API key, sent as a bearer token
            model: Model to request
            base_url: API base URL; requests go to {base_url}/chat/completions
            timeout: Seconds to wait for a response, None for no limit
            **client_kwargs: Additional kwargs for AsyncOpenAI (e.g. http_client)
        """
        if not api_key:
            raise ValueError("api_key must be a non-empty string")

        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        """Get the model name."""
        return self._model

    async def send_chat(self, instructions: str, user_text: str) -> str:
        """Send the instruction and the user's text, return the answer.

        Args:
            instructions: System message
            user_text: User message

        Returns:
            Content of the first choice

        Raises:
            RequestTimeoutError: The endpoint did not answer in time
            TransportError: The connection failed
            UpstreamStatusError: Non-2xx response
            MalformedResponseError: Body is not a chat-completion response
            EmptyChoicesError: Body has an empty choices list
        """
        request = ChatRequest.build(self._model, instructions, user_text)

        try:
            raw = await self._client.chat.completions.with_raw_response.create(
                model=request.model,
                messages=request.to_openai_messages(),
            )
        except openai.APITimeoutError as e:
            raise RequestTimeoutError("request timed out waiting for the endpoint") from e
        except openai.APIConnectionError as e:
            raise TransportError(f"connection failed: {e.__cause__ or e}") from e
        except openai.APIStatusError as e:
            raise UpstreamStatusError(e.status_code, _status_detail(e)) from e

        body = raw.http_response.text
        try:
            response = ChatResponse.model_validate_json(body)
        except ValidationError as e:
            raise MalformedResponseError(
                f"malformed response: {e.error_count()} validation error(s), "
                f"first: {e.errors()[0]['msg']}"
            ) from e

        return response.first_content()

    async def close(self) -> None:
        """Close the OpenAI client."""
        await self._client.close()
