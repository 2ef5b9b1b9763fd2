"""
RAG (Retrieval-Augmented Generation) module.

Provides retrieval components for hybrid search over curriculum passages:
- Query embedding (OpenAI or sentence-transformers)
- Passage stores (chromadb, in-memory numpy)
- Concurrent vector + keyword search with best-effort keyword branch
"""

from .config import RetrievalConfig
from .embedder import Embedder, OpenAIEmbedder, SentenceTransformerEmbedder, create_embedder
from .errors import EmbeddingError, PassageValidationError, PatternSearchUnsupported, RetrievalError
from .hybrid import RetrievalOrchestrator
from .index import Passage, load_passages, passage_from_record
from .retriever import RetrievedPassage, SearchOutcome
from .store import ChromaPassageStore, InMemoryPassageStore, PassageStore, create_store
from .utils import keyword_pattern, normalize_query

__all__ = [
    "ChromaPassageStore",
    "create_embedder",
    "create_store",
    "Embedder",
    "EmbeddingError",
    "InMemoryPassageStore",
    "keyword_pattern",
    "load_passages",
    "normalize_query",
    "OpenAIEmbedder",
    "Passage",
    "passage_from_record",
    "PassageStore",
    "PassageValidationError",
    "PatternSearchUnsupported",
    "RetrievalConfig",
    "RetrievalError",
    "RetrievalOrchestrator",
    "RetrievedPassage",
    "SearchOutcome",
    "SentenceTransformerEmbedder",
]
