"""
gptdesk: a question/answer window in front of a chat-completion endpoint.

Every request pairs a fixed instruction (the system message) with the
user's question and shows the first returned answer.
"""

__version__ = "0.1.0"

from .config import AppConfig, ConfigError, load_config
from .llm import ChatClient, ChatError, OpenAIChatClient, create_chat_client, send_chat

__all__ = [
    "AppConfig",
    "ChatClient",
    "ChatError",
    "ConfigError",
    "OpenAIChatClient",
    "create_chat_client",
    "load_config",
    "send_chat",
]
