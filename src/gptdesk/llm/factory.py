from typing import Any

from .base import ChatClient
from .providers import OpenAIChatClient


def create_chat_client(provider: str = "openai", **config: Any) -> ChatClient:
    """Create a chat client instance.

    Args:
        provider: Provider type (only 'openai' is supported)
        **config: Client configuration
            - api_key: str (required)
            - model: str (default: 'gpt-4')
            - base_url: str (default: 'https://api.openai.com/v1')
            - timeout: float | None (default: 60.0)

    Returns:
        Initialized chat client

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing
    """
    if provider.lower() == "openai":
        if "api_key" not in config:
            raise TypeError("OpenAI client requires 'api_key' in config")
        return OpenAIChatClient(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. Supported providers: 'openai'"
    )


async def send_chat(
    api_key: str,
    instructions: str,
    user_text: str,
    **config: Any
) -> str:
    """One-shot request: open a client, send, close.

    Examples:
        >>> answer = await send_chat(
        ...     "sk-...",
        ...     "Analyze the following data:",
        ...     '{"key": "value"}',
        ... )
    """
    async with create_chat_client("openai", api_key=api_key, **config) as client:
        return await client.send_chat(instructions, user_text)
