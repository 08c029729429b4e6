# Copyright (c) 2025 Cade Russell (Ghost Peony)
#
# This source code is licensed under the MIT license found in the
# LICENSE file in the root directory of this source tree.

"""
Chat request/response schemas shared by every provider.

These are transient: created per call and never stored.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage


class ChatMessage(BaseModel):
    """A single chat turn."""
    role: Literal["system", "user", "assistant"]
    content: str

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    def to_langchain(self) -> BaseMessage:
        """Convert to the equivalent LangChain message."""
        if self.role == "system":
            return SystemMessage(content=self.content)
        if self.role == "assistant":
            return AIMessage(content=self.content)
        return HumanMessage(content=self.content)


class ChatOptions(BaseModel):
    """Per-call sampling options. The harness fills in `model` per provider."""
    model: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)


class TokenUsage(BaseModel):
    """Token counts reported by the backend."""
    prompt: int = 0
    completion: int = 0
    total: int = 0


class ChatResponse(BaseModel):
    """Text returned by a provider plus optional usage."""
    content: str
    usage: Optional[TokenUsage] = None
    provider: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def from_ai_message(cls, message: Any, provider: Optional[str] = None, model: Optional[str] = None) -> "ChatResponse":
        """
        Build a response from a LangChain AIMessage.

        Content may be a plain string or a list of content blocks; only
        text blocks are kept.
        """
        usage = None
        usage_metadata = getattr(message, "usage_metadata", None)
        if usage_metadata:
            prompt = usage_metadata.get("input_tokens", 0) or 0
            completion = usage_metadata.get("output_tokens", 0) or 0
            usage = TokenUsage(
                prompt=prompt,
                completion=completion,
                total=usage_metadata.get("total_tokens") or prompt + completion
            )

        return cls(
            content=_text_content(getattr(message, "content", "")),
            usage=usage,
            provider=provider,
            model=model
        )


def to_langchain_messages(messages: List[ChatMessage]) -> List[BaseMessage]:
    return [m.to_langchain() for m in messages]


def _text_content(content: Any) -> str:
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content)
