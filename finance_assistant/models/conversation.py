"""
Conversation Models for Finance Assistant

These models describe the chat history exchanged with the completion
service (OpenAI-compatible wire format).

CRITICAL: The history is resubmitted verbatim on every request.
Every assistant tool-call message and every tool-result message must be
kept, in order, or the service cannot correlate calls with results.
Provider-assigned fields we do not model are kept as extras and sent back.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class MessageRole(str, Enum):
    """Who authored a message."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FunctionCall(BaseModel):
    """Name and raw JSON arguments of a requested function."""
    model_config = ConfigDict(extra="allow")

    name: str
    arguments: str = Field(
        default="{}",
        description="Raw argument payload, expected to be a JSON object"
    )


class ToolCall(BaseModel):
    """A single tool invocation requested by the assistant."""
    model_config = ConfigDict(extra="allow")

    id: str = Field(
        ...,
        description="Correlation identifier echoed back in the tool result"
    )
    type: str = "function"
    function: FunctionCall


class Message(BaseModel):
    """
    One turn in the conversation.

    - system/user: content only
    - assistant: content and/or tool_calls
    - tool: content plus tool_call_id of the call it answers
    """
    model_config = ConfigDict(extra="allow")

    role: MessageRole
    content: Optional[str] = None
    tool_calls: Optional[list[ToolCall]] = None
    tool_call_id: Optional[str] = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def tool_result(cls, tool_call_id: str, content: str) -> "Message":
        return cls(
            role=MessageRole.TOOL,
            tool_call_id=tool_call_id,
            content=content,
        )

    @classmethod
    def from_completion_message(cls, message: Any) -> "Message":
        """
        Convert an SDK ChatCompletionMessage into our model.

        Accepts anything with model_dump() (openai SDK types) or a plain dict.
        """
        if hasattr(message, "model_dump"):
            data = message.model_dump(exclude_none=True)
        else:
            data = {k: v for k, v in dict(message).items() if v is not None}
        return cls.model_validate(data)

    def to_api_dict(self) -> dict[str, Any]:
        """
        Serialize for the completion request.

        Unset optional fields are dropped; extras are kept as received.
        """
        return self.model_dump(mode="json", exclude_none=True)
