"""Configuration for prompt construction."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GenerationConfig:
    """Settings for building the model prompt."""

    history_window: int = 6
