"""
Exceptions raised by the retrieval layer.
"""

from __future__ import annotations


class RetrievalError(Exception):
    """Base class for retrieval failures."""


class EmbeddingError(RetrievalError):
    """The embedder could not produce a query vector. Fatal for the request."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query


class PassageValidationError(RetrievalError):
    """A record returned by the passage store is missing its identity or text."""


class PatternSearchUnsupported(RetrievalError):
    """The passage store cannot run literal pattern queries."""
