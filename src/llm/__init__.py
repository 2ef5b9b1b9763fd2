"""
LLM client module for OpenAI-compatible streaming chat completions.
"""

from .client import CompletionModel, FragmentStream, OpenAIChatClient, SamplingParams, create_client

__all__ = ["CompletionModel", "FragmentStream", "OpenAIChatClient", "SamplingParams", "create_client"]
