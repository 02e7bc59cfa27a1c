from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .errors import EmptyChoicesError


class Role(str, Enum):
    """Message roles used by the chat-completion request."""

    SYSTEM = "system"
    USER = "user"


class ChatMessage(BaseModel):
    """Represents a single role-tagged message sent to the endpoint."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    role: Role = Field(description="Role of the message sender: 'system' or 'user'")
    content: str = Field(description="Content of the message, sent verbatim")


class ChatRequest(BaseModel):
    """Request body for the chat-completions endpoint.

    Always exactly two messages: the fixed instruction as the system
    message, then the live user text.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier")
    messages: tuple[ChatMessage, ChatMessage] = Field(
        description="System message followed by user message"
    )

    @model_validator(mode="after")
    def _check_roles(self) -> "ChatRequest":
        roles = [msg.role for msg in self.messages]
        if roles != [Role.SYSTEM.value, Role.USER.value]:
            raise ValueError(f"messages must be [system, user], got {roles}")
        return self

    @classmethod
    def build(cls, model: str, instructions: str, user_text: str) -> "ChatRequest":
        """Build a request from the instruction text and the user's input."""
        return cls(
            model=model,
            messages=(
                ChatMessage(role=Role.SYSTEM, content=instructions),
                ChatMessage(role=Role.USER, content=user_text),
            ),
        )

    def to_openai_messages(self) -> list[dict[str, Any]]:
        return [{"role": msg.role, "content": msg.content} for msg in self.messages]


class MessageContent(BaseModel):
    content: str


class Choice(BaseModel):
    message: MessageContent


class ChatResponse(BaseModel):
    """Parsed chat-completion response.

    Only the fields that are read are declared; everything else the API
    returns (id, usage, finish_reason, ...) is ignored.
    """

    choices: list[Choice]

    def first_content(self) -> str:
        """Return the content of the first choice.

        Raises:
            EmptyChoicesError: If the endpoint returned no choices
        """
        if not self.choices:
            raise EmptyChoicesError("response contained no choices")
        return self.choices[0].message.content
