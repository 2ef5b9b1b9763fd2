"""
Query embedders: OpenAI embeddings API or a local sentence-transformers model.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, List, Optional, Protocol

import numpy as np
from openai import AsyncOpenAI

if TYPE_CHECKING:
    from sentence_transformers import SentenceTransformer

    from src.config import Settings

logger = logging.getLogger(__name__)

OPENAI_EMBEDDING_MODEL = "text-embedding-3-small"
LOCAL_EMBEDDING_MODEL = "all-MiniLM-L6-v2"


class Embedder(Protocol):
    """Maps normalized text to a fixed-length dense vector."""

    async def embed(self, text: str) -> List[float]:
        ...


class OpenAIEmbedder:
    """Embedder backed by the OpenAI embeddings endpoint."""

    def __init__(self, client: AsyncOpenAI, model: str = OPENAI_EMBEDDING_MODEL):
        self.client = client
        self.model = model

    async def embed(self, text: str) -> List[float]:
        response = await self.client.embeddings.create(
            model=self.model,
            input=text,
            encoding_format="float",
        )
        return list(response.data[0].embedding)


class SentenceTransformerEmbedder:
    """Local embedder; encoding runs in a worker thread to keep the loop free."""

    def __init__(self, model: "SentenceTransformer"):
        self.model = model

    @classmethod
    def from_name(cls, model_name: str = LOCAL_EMBEDDING_MODEL) -> "SentenceTransformerEmbedder":
        from sentence_transformers import SentenceTransformer

        logger.info("Loading sentence-transformers model %s", model_name)
        return cls(SentenceTransformer(model_name))

    def _encode(self, text: str) -> List[float]:
        emb = self.model.encode(
            [text],
            convert_to_numpy=True,
            normalize_embeddings=True,
        )[0]
        return np.asarray(emb, dtype=float).tolist()

    async def embed(self, text: str) -> List[float]:
        return await asyncio.to_thread(self._encode, text)


def create_embedder(settings: "Settings", client: Optional[AsyncOpenAI] = None) -> Embedder:
    """Build the embedder selected by EMBEDDING_PROVIDER."""
    provider = settings.embedding_provider
    if provider in ("sentence-transformers", "sentence_transformers", "local"):
        return SentenceTransformerEmbedder.from_name(settings.embedding_model or LOCAL_EMBEDDING_MODEL)
    if provider != "openai":
        raise ValueError(f"Unknown EMBEDDING_PROVIDER: {provider}")
    if client is None:
        if not settings.openai_api_key:
            raise ValueError("API key required. Set OPENAI_API_KEY.")
        client = AsyncOpenAI(api_key=settings.openai_api_key, base_url=settings.llm_base_url, max_retries=0)
    return OpenAIEmbedder(client, model=settings.embedding_model or OPENAI_EMBEDDING_MODEL)
