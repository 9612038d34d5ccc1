"""Prompt bundle models.

A prompt bundle is what an LLM adapter hands to the gateway. Message content
is either a plain string or a list of content parts (text, image_url, file),
which is how LiteLLM expects multimodal input.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

MessageContent = Union[str, List[Dict[str, Any]]]


class Message(BaseModel):
    """Single message in LLM conversation."""

    role: str = Field(
        ..., description="Message role: 'system', 'user', or 'assistant'"
    )
    content: MessageContent = Field(..., description="Text or multimodal content parts")


class PromptBundle(BaseModel):
    """Complete prompt package ready for the LLM gateway."""

    messages: List[Message] = Field(..., description="Conversation messages")

    temperature: float = Field(
        default=0.3, ge=0.0, le=2.0, description="Sampling temperature"
    )
    max_tokens: int = Field(
        default=4096, gt=0, description="Maximum tokens in response"
    )

    # Metadata for logging
    mode: str = Field(default="text", description="'vision', 'text' or 'detect'")

    @property
    def system_prompt(self) -> Optional[str]:
        """Extract system prompt from messages."""
        for msg in self.messages:
            if msg.role == "system" and isinstance(msg.content, str):
                return msg.content
        return None

    def to_messages(self) -> List[Dict[str, Any]]:
        """Convert to the message list format litellm accepts."""
        return [{"role": msg.role, "content": msg.content} for msg in self.messages]
