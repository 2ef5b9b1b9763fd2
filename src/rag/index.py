"""
Passage records and the JSONL loader used by the in-memory store.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping

from .errors import PassageValidationError

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Passage:
    """A stored chunk of source text with its embedding vector."""

    id: str
    text: str
    vector: List[float] = dataclasses.field(default_factory=list)


def passage_from_record(record: Mapping[str, Any]) -> Passage:
    """
    Validate a loosely typed store record and convert it to a Passage.

    Accepts ``id`` or ``_id`` for the identity and ``vector``, ``$vector`` or
    ``embedding`` for the dense vector (which may be absent).
    """
    raw_id = record.get("id", record.get("_id"))
    if raw_id is None or str(raw_id) == "":
        raise PassageValidationError("passage record has no identity")
    text = record.get("text")
    if not isinstance(text, str):
        raise PassageValidationError(f"passage {raw_id} has no text field")
    vector = record.get("vector", record.get("$vector", record.get("embedding")))
    return Passage(
        id=str(raw_id),
        text=text,
        vector=[float(x) for x in vector] if vector is not None else [],
    )


def passages_from_records(records: Iterable[Mapping[str, Any]]) -> List[Passage]:
    """Convert records, skipping (and logging) the ones that fail validation."""
    passages: List[Passage] = []
    for record in records:
        try:
            passages.append(passage_from_record(record))
        except PassageValidationError as e:
            logger.warning("Skipping invalid passage record: %s", e)
    return passages


def load_passages(path: Path) -> List[Passage]:
    """Load passages from a JSONL file of {id, text, vector} objects."""
    if not path.exists():
        raise FileNotFoundError(f"passages file not found at {path}")

    records = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            records.append(json.loads(line))
    return passages_from_records(records)
