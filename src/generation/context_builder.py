"""
Context builder for RAG answer generation.

Deduplicates retrieved passages by identity and joins their texts into the
single context block injected into the system prompt.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from src.rag.retriever import RetrievedPassage

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"


def dedupe_passages(results: Iterable[RetrievedPassage]) -> List[RetrievedPassage]:
    """Keep the first occurrence of each passage id, preserving order."""
    seen: set[str] = set()
    unique: List[RetrievedPassage] = []
    for r in results:
        if r.id in seen:
            continue
        seen.add(r.id)
        unique.append(r)
    return unique


def build_context(results: Iterable[RetrievedPassage]) -> str:
    """
    Join deduplicated passage texts with a blank line between them.

    Args:
        results: Vector hits followed by keyword hits; earlier entries win
            when the same passage appears twice.

    Returns:
        The context block, or "" when nothing was retrieved.
    """
    unique = dedupe_passages(results)
    if not unique:
        return ""

    if logger.isEnabledFor(logging.DEBUG):
        for r in unique:
            preview = r.text[:100] + "..." if len(r.text) > 100 else r.text
            logger.debug("Retrieved chunk id=%s source=%s preview=%r", r.id, r.source, preview)

    return CONTEXT_SEPARATOR.join(r.text for r in unique)
