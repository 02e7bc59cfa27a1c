from abc import ABC, abstractmethod
from typing import Any


class ChatClient(ABC):
    """Abstract base class for chat-completion clients.

    This module hides the design decision of how a single
    instruction/question pair reaches the model. Implementations must
    handle:
    - API client setup and authentication
    - Request/response format conversion
    - Mapping transport and protocol failures onto ChatError subclasses

    Supports async context manager protocol for proper resource cleanup:
        async with client:
            answer = await client.send_chat(instructions, question)
        # Automatically cleaned up
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model identifier sent with every request."""

    @abstractmethod
    async def send_chat(self, instructions: str, user_text: str) -> str:
        """Send one system+user exchange and return the first choice's text.

        Args:
            instructions: System message, used verbatim
            user_text: User message, used verbatim

        Returns:
            Content of the first returned choice

        Raises:
            ChatError: One of its subclasses, for any per-request failure
        """

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""

    async def __aenter__(self) -> "ChatClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup.

        Note: Suppresses "Event loop is closed" errors during cleanup.
        This is a known harmless race condition in httpx/anyio cleanup:
        https://github.com/encode/httpx/issues/914
        """
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
