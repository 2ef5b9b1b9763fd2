"""
Utility functions for RAG module.
"""

from __future__ import annotations

import re

WHITESPACE_RE = re.compile(r"\s+")
# Anything that is neither a word character nor whitespace. Python's \w is
# Unicode aware but does not cover combining marks, so Sinhala vowel signs
# (category Mc/Mn) and the zero-width joiner are listed explicitly.
PUNCTUATION_RE = re.compile(r"[^\w\s\u0D80-\u0DFF\u200D]")


def normalize_query(text: str) -> str:
    """Collapse runs of whitespace to a single space and trim the ends."""
    return WHITESPACE_RE.sub(" ", text).strip()


def keyword_pattern(text: str) -> str:
    """
    Replace punctuation with spaces so the message can be used as a literal match.

    Only punctuation is touched; whitespace and letters are left as typed.
    """
    return PUNCTUATION_RE.sub(" ", text)
