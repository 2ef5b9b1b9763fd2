"""
Configuration for the retrieval step.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class RetrievalConfig:
    """Candidate caps for the two searches run per request."""

    vector_k: int = 8
    keyword_k: int = 3
    use_keyword_search: bool = True
