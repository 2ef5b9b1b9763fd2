"""
Answer generation module for RAG pipeline.

- Context building from retrieved passages (dedup by id, blank-line joined)
- Prompt construction (system instruction + trailing conversation window)
"""

from .config import GenerationConfig
from .context_builder import build_context, dedupe_passages
from .prompt_builder import Prompt, PromptBuilder, render_system_prompt
from .prompts import EMPTY_CONTEXT_MARKER, NO_INFORMATION_RESPONSE, SYSTEM_PROMPT

__all__ = [
    "build_context",
    "dedupe_passages",
    "EMPTY_CONTEXT_MARKER",
    "GenerationConfig",
    "NO_INFORMATION_RESPONSE",
    "Prompt",
    "PromptBuilder",
    "render_system_prompt",
    "SYSTEM_PROMPT",
]
