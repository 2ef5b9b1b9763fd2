"""
Retrieval result types shared by the orchestrator and the context builder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .index import Passage

Source = Literal["vector", "keyword"]


@dataclass
class RetrievedPassage:
    """A passage plus the search that surfaced it."""

    passage: Passage
    source: Source

    @property
    def id(self) -> str:
        return self.passage.id

    @property
    def text(self) -> str:
        return self.passage.text


@dataclass
class SearchOutcome:
    """Tagged result of one search branch: passages on success, the error on failure."""

    source: Source
    passages: List[Passage] = field(default_factory=list)
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def contribution(self) -> List[RetrievedPassage]:
        """Passages this branch adds to the merge; a failed branch adds nothing."""
        if not self.ok:
            return []
        return [RetrievedPassage(passage=p, source=self.source) for p in self.passages]
