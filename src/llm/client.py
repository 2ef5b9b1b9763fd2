"""
Streaming chat client for OpenAI-compatible APIs (OpenAI, or any endpoint set via LLM_BASE_URL).
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol

from openai import AsyncOpenAI

DEFAULT_MODEL = "chatgpt-4o-latest"

logger = logging.getLogger(__name__)


@dataclass
class SamplingParams:
    """Sampling settings sent with every completion request."""

    model: str = DEFAULT_MODEL
    temperature: float = 0.3
    max_tokens: int = 1000
    top_p: float = 0.9


class CompletionModel(Protocol):
    """Streams model output for a message list."""

    async def stream(
        self,
        messages: List[Dict[str, str]],
        params: Optional[SamplingParams] = None,
    ) -> AsyncIterator[str]:
        """
        Open a completion stream.

        Awaiting this call sends the request, so an outright rejection raises
        here. The returned iterator yields text fragments in arrival order and
        can be consumed only once.
        """
        ...


def _resolve_client_params(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> tuple[str, Optional[str]]:
    """Resolve api_key, base_url from args or env."""
    key = api_key or os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or ""
    base = base_url or os.getenv("LLM_BASE_URL") or None
    return key, base


class FragmentStream:
    """Single-use async iterator over the text deltas of one completion stream."""

    def __init__(self, response: Any):
        self._response = response
        self._chunks = response.__aiter__()
        self._closed = False

    def __aiter__(self) -> "FragmentStream":
        return self

    async def __anext__(self) -> str:
        while True:
            chunk = await self._chunks.__anext__()
            if chunk.choices and chunk.choices[0].delta.content:
                return chunk.choices[0].delta.content

    async def aclose(self) -> None:
        """Release the HTTP connection; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self._response.close()


class OpenAIChatClient:
    """OpenAI-compatible streaming chat client."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        if client is None:
            key, base = _resolve_client_params(api_key=api_key, base_url=base_url)
            if not key:
                raise ValueError("API key required. Set OPENAI_API_KEY (or LLM_API_KEY with LLM_BASE_URL).")
            client = AsyncOpenAI(api_key=key, base_url=base, max_retries=0)
        self.client = client

    async def stream(
        self,
        messages: List[Dict[str, str]],
        params: Optional[SamplingParams] = None,
    ) -> FragmentStream:
        params = params or SamplingParams()
        stream_kw: Dict[str, Any] = asdict(params)
        stream_kw["messages"] = messages
        stream_kw["stream"] = True
        logger.debug("Opening completion stream (model=%s, messages=%s)", params.model, len(messages))
        response = await self.client.chat.completions.create(**stream_kw)
        return FragmentStream(response)


def create_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> OpenAIChatClient:
    """Create an OpenAI-compatible streaming client."""
    return OpenAIChatClient(api_key=api_key, base_url=base_url)
