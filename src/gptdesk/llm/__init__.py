from .base import ChatClient
from .errors import (
    ChatError,
    EmptyChoicesError,
    MalformedResponseError,
    RequestTimeoutError,
    TransportError,
    UpstreamStatusError,
)
from .factory import create_chat_client, send_chat
from .models import ChatMessage, ChatRequest, ChatResponse, Choice, Role
from .providers import OpenAIChatClient

__all__ = [
    "ChatClient",
    "ChatError",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "Choice",
    "EmptyChoicesError",
    "MalformedResponseError",
    "OpenAIChatClient",
    "RequestTimeoutError",
    "Role",
    "TransportError",
    "UpstreamStatusError",
    "create_chat_client",
    "send_chat",
]
