"""
Request and response models for the chat API.
"""

from __future__ import annotations

from typing import Dict, List, Literal

from pydantic import BaseModel, Field, model_validator


class ChatMessage(BaseModel):
    """One conversation turn as sent by the client."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Request body for POST /chat."""

    messages: List[ChatMessage] = Field(..., min_length=1, description="Conversation, oldest first")

    @model_validator(mode="after")
    def _last_turn_is_user_question(self) -> "ChatRequest":
        last = self.messages[-1]
        if last.role != "user":
            raise ValueError("last message must be from the user")
        if not last.content.strip():
            raise ValueError("last message must not be empty")
        return self

    def conversation(self) -> List[Dict[str, str]]:
        return [{"role": m.role, "content": m.content} for m in self.messages]


class ErrorResponse(BaseModel):
    """Body of every non-streamed error response."""

    error: str


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = "ok"
    agent_ready: bool = False
