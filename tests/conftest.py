"""
Fakes for the external capabilities (embedder, passage store, completion model).
"""

from __future__ import annotations

import asyncio
from typing import List, Optional, Sequence

import pytest

from src.rag import Passage


@pytest.fixture
def anyio_backend():
    """The code under test is asyncio-based; run anyio-marked tests on asyncio."""
    return "asyncio"


class FakeEmbedder:
    def __init__(self, vector: Optional[List[float]] = None, error: Optional[Exception] = None):
        self.vector = vector or [1.0, 0.0, 0.0]
        self.error = error
        self.calls: List[str] = []

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vector


class FakeStore:
    def __init__(
        self,
        vector_hits: Sequence[Passage] = (),
        keyword_hits: Sequence[Passage] = (),
        vector_error: Optional[Exception] = None,
        keyword_error: Optional[Exception] = None,
        vector_delay: float = 0.0,
        keyword_delay: float = 0.0,
    ):
        self.vector_hits = list(vector_hits)
        self.keyword_hits = list(keyword_hits)
        self.vector_error = vector_error
        self.keyword_error = keyword_error
        self.vector_delay = vector_delay
        self.keyword_delay = keyword_delay
        self.vector_calls: list = []
        self.pattern_calls: list = []

    async def vector_search(self, vector, limit):
        self.vector_calls.append((list(vector), limit))
        await asyncio.sleep(self.vector_delay)
        if self.vector_error is not None:
            raise self.vector_error
        return self.vector_hits[:limit]

    async def pattern_search(self, pattern, limit):
        self.pattern_calls.append((pattern, limit))
        await asyncio.sleep(self.keyword_delay)
        if self.keyword_error is not None:
            raise self.keyword_error
        return self.keyword_hits[:limit]


class ScriptedStream:
    """Yields the scripted fragments, then raises error if one is set."""

    def __init__(self, fragments: Sequence[str], error: Optional[Exception] = None):
        self._fragments = list(fragments)
        self._error = error
        self.closed = False

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        if self._fragments:
            return self._fragments.pop(0)
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        raise StopAsyncIteration

    async def aclose(self) -> None:
        self.closed = True


class ScriptedModel:
    def __init__(
        self,
        fragments: Sequence[str] = (),
        error: Optional[Exception] = None,
        reject: Optional[Exception] = None,
    ):
        self.fragments = fragments
        self.error = error
        self.reject = reject
        self.requests: list = []
        self.streams: List[ScriptedStream] = []

    async def stream(self, messages, params=None):
        self.requests.append((messages, params))
        if self.reject is not None:
            raise self.reject
        s = ScriptedStream(self.fragments, self.error)
        self.streams.append(s)
        return s


def make_passage(pid: str, text: Optional[str] = None) -> Passage:
    return Passage(id=pid, text=text or f"text of {pid}", vector=[])


@pytest.fixture
def passages() -> list[Passage]:
    """Sample Sinhala science passages."""
    return [
        Passage(id="p1", text="ප්‍රභාසංශ්ලේෂණය යනු ශාක ආහාර නිපදවන ක්‍රියාවලියයි.", vector=[1.0, 0.0, 0.0]),
        Passage(id="p2", text="ශ්වසනය මගින් ශක්තිය මුදා හරියි.", vector=[0.0, 1.0, 0.0]),
        Passage(id="p3", text="ජලය H2O ලෙස ලියයි.", vector=[0.7, 0.7, 0.0]),
    ]
