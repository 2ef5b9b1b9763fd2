"""
Passage stores: nearest-neighbor search plus a literal pattern search over passage text.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Protocol, Sequence

import numpy as np

from .errors import PatternSearchUnsupported
from .index import Passage, load_passages, passages_from_records

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)


class PassageStore(Protocol):
    """Protocol for passage store implementations."""

    async def vector_search(self, vector: Sequence[float], limit: int) -> List[Passage]:
        """Nearest neighbors to vector, most similar first."""
        ...

    async def pattern_search(self, pattern: str, limit: int) -> List[Passage]:
        """
        Passages whose text matches pattern.

        May raise (including PatternSearchUnsupported); callers treat this
        search as best-effort.
        """
        ...


class ChromaPassageStore:
    """PassageStore over a chromadb collection populated by the ingestion job."""

    def __init__(self, client: Any, collection_name: str):
        self.client = client
        self.collection_name = collection_name
        self._collection: Any = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "ChromaPassageStore":
        import chromadb

        if settings.chroma_host:
            client = chromadb.HttpClient(host=settings.chroma_host, port=settings.chroma_port)
        else:
            client = chromadb.PersistentClient(path=settings.chroma_persist_dir)
        return cls(client, settings.chroma_collection)

    def _get_collection(self) -> Any:
        # Not created here: collection setup belongs to the ingestion job.
        if self._collection is None:
            self._collection = self.client.get_collection(self.collection_name)
        return self._collection

    def _query(self, vector: List[float], limit: int) -> List[Passage]:
        res = self._get_collection().query(
            query_embeddings=[vector],
            n_results=limit,
            include=["documents"],
        )
        ids = (res.get("ids") or [[]])[0]
        docs = (res.get("documents") or [[]])[0]
        return passages_from_records({"id": i, "text": d} for i, d in zip(ids, docs))

    def _get(self, pattern: str, limit: int) -> List[Passage]:
        collection = self._get_collection()
        try:
            res = collection.get(
                where_document={"$regex": pattern},
                limit=limit,
                include=["documents"],
            )
        except ValueError as e:
            # Older chromadb servers reject the $regex operator.
            raise PatternSearchUnsupported(str(e)) from e
        ids = res.get("ids") or []
        docs = res.get("documents") or []
        return passages_from_records({"id": i, "text": d} for i, d in zip(ids, docs))

    async def vector_search(self, vector: Sequence[float], limit: int) -> List[Passage]:
        return await asyncio.to_thread(self._query, list(vector), limit)

    async def pattern_search(self, pattern: str, limit: int) -> List[Passage]:
        return await asyncio.to_thread(self._get, pattern, limit)


@dataclass
class InMemoryPassageStore:
    """Cosine-similarity store held in memory; for development and tests."""

    passages: List[Passage]
    embeddings: np.ndarray  # shape: (n_passages, dim)

    @classmethod
    def from_passages(cls, passages: List[Passage]) -> "InMemoryPassageStore":
        if not passages:
            return cls(passages=[], embeddings=np.zeros((0, 0)))
        emb = np.array([p.vector for p in passages], dtype=float)
        norms = np.linalg.norm(emb, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        return cls(passages=list(passages), embeddings=emb / norms)

    @classmethod
    def from_jsonl(cls, path: Path) -> "InMemoryPassageStore":
        passages = load_passages(path)
        logger.info("Loaded %s passages from %s", len(passages), path)
        return cls.from_passages(passages)

    async def vector_search(self, vector: Sequence[float], limit: int) -> List[Passage]:
        if not self.passages:
            return []
        q = np.asarray(vector, dtype=float)
        norm = np.linalg.norm(q)
        if norm:
            q = q / norm
        sims = np.dot(self.embeddings, q)
        idxs = np.argsort(-sims, kind="stable")[:limit]
        return [self.passages[int(i)] for i in idxs]

    async def pattern_search(self, pattern: str, limit: int) -> List[Passage]:
        try:
            regex = re.compile(pattern)
        except re.error as e:
            raise PatternSearchUnsupported(f"invalid pattern: {e}") from e
        hits: List[Passage] = []
        for p in self.passages:
            if regex.search(p.text):
                hits.append(p)
                if len(hits) >= limit:
                    break
        return hits


def create_store(settings: "Settings") -> PassageStore:
    """Build the passage store selected by PASSAGE_STORE."""
    if settings.passage_store == "memory":
        return InMemoryPassageStore.from_jsonl(Path(settings.passages_path))
    if settings.passage_store != "chroma":
        raise ValueError(f"Unknown PASSAGE_STORE: {settings.passage_store}")
    return ChromaPassageStore.from_settings(settings)
