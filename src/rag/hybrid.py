"""
Hybrid retrieval: vector search and keyword pattern search run concurrently and
are concatenated (vector results first).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, List, Optional

from .config import RetrievalConfig
from .embedder import Embedder
from .errors import EmbeddingError
from .index import Passage
from .retriever import RetrievedPassage, SearchOutcome, Source
from .store import PassageStore
from .utils import keyword_pattern, normalize_query

logger = logging.getLogger(__name__)


async def _run_search(source: Source, search: Awaitable[List[Passage]]) -> SearchOutcome:
    """Await one search and fold any failure into the outcome instead of raising."""
    try:
        passages = await search
    except Exception as e:
        return SearchOutcome(source=source, error=e)
    return SearchOutcome(source=source, passages=list(passages))


class RetrievalOrchestrator:
    """Embeds the latest user message and runs both searches against the store."""

    def __init__(
        self,
        embedder: Embedder,
        store: PassageStore,
        config: Optional[RetrievalConfig] = None,
    ):
        self.embedder = embedder
        self.store = store
        self.config = config or RetrievalConfig()

    async def embed_query(self, message: str) -> List[float]:
        normalized = normalize_query(message)
        try:
            return await self.embedder.embed(normalized)
        except Exception as e:
            raise EmbeddingError(f"embedding failed: {e}", query=message) from e

    async def _keyword_search(self, message: str) -> List[Passage]:
        pattern = keyword_pattern(message)
        if not self.config.use_keyword_search or not pattern.strip():
            return []
        return await self.store.pattern_search(pattern, self.config.keyword_k)

    async def retrieve(self, message: str) -> List[RetrievedPassage]:
        """
        Return vector hits followed by keyword hits for the latest user message.

        Raises EmbeddingError when no query vector can be obtained. Store
        failures never raise: a failed branch contributes no passages.
        """
        vector = await self.embed_query(message)

        vector_outcome, keyword_outcome = await asyncio.gather(
            _run_search("vector", self.store.vector_search(vector, self.config.vector_k)),
            _run_search("keyword", self._keyword_search(message)),
        )

        if not vector_outcome.ok:
            logger.error("Vector search failed: %s", vector_outcome.error)
        if not keyword_outcome.ok:
            logger.warning(
                "Keyword search not supported or failed, using only vector search: %s",
                keyword_outcome.error,
            )

        results = vector_outcome.contribution() + keyword_outcome.contribution()
        logger.debug(
            "Retrieved %s vector and %s keyword passages",
            len(vector_outcome.passages),
            len(keyword_outcome.passages),
        )
        return results
