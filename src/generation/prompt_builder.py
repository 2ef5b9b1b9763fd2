"""
Builds the message list sent to the completion model: rendered system prompt
first, then the trailing window of the conversation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from .config import GenerationConfig
from .prompts import (
    EMPTY_CONTEXT_MARKER,
    GREETING_RESPONSE,
    NO_INFORMATION_RESPONSE,
    SYSTEM_PROMPT,
)


@dataclass
class Prompt:
    """System instruction plus the bounded conversation history."""

    system: str
    history: List[Dict[str, str]] = field(default_factory=list)

    def messages(self) -> List[Dict[str, str]]:
        return [{"role": "system", "content": self.system}, *self.history]


def render_system_prompt(context: str, query: str) -> str:
    """Fill the instruction template; an empty context is replaced by an explicit marker."""
    return SYSTEM_PROMPT.format(
        greeting=GREETING_RESPONSE,
        no_information=NO_INFORMATION_RESPONSE,
        context=context if context.strip() else EMPTY_CONTEXT_MARKER,
        query=query,
    )


class PromptBuilder:
    """Pure prompt construction; identical inputs give an identical Prompt."""

    def __init__(self, config: Optional[GenerationConfig] = None):
        self.config = config or GenerationConfig()

    def build(
        self,
        context: str,
        query: str,
        conversation: Sequence[Mapping[str, str]],
    ) -> Prompt:
        window = self.config.history_window
        recent = list(conversation)[-window:] if window > 0 else []
        history = [{"role": m["role"], "content": m["content"]} for m in recent]
        return Prompt(system=render_system_prompt(context, query), history=history)
