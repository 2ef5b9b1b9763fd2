"""
Process settings read from the environment (and an optional .env file).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.llm.client import SamplingParams
from src.rag.config import RetrievalConfig

ROOT = Path(__file__).resolve().parents[1]

# Load .env file if it exists
env_file = ROOT / ".env"
if env_file.exists():
    load_dotenv(env_file)


@dataclass
class Settings:
    """Settings for the chat backend."""

    openai_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    embedding_provider: str = "openai"
    embedding_model: Optional[str] = None
    passage_store: str = "chroma"
    chroma_host: Optional[str] = None
    chroma_port: int = 8000
    chroma_persist_dir: str = str(ROOT / "data" / "chroma")
    chroma_collection: str = "div_passages"
    passages_path: str = str(ROOT / "data" / "passages.jsonl")
    log_level: str = "INFO"
    port: int = 5000
    retrieval: RetrievalConfig = field(default_factory=RetrievalConfig)
    sampling: SamplingParams = field(default_factory=SamplingParams)


def get_settings() -> Settings:
    """Build Settings from environment variables."""
    sampling = SamplingParams()
    if os.getenv("LLM_MODEL"):
        sampling.model = os.environ["LLM_MODEL"]
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        llm_base_url=os.getenv("LLM_BASE_URL"),
        embedding_provider=os.getenv("EMBEDDING_PROVIDER", "openai").lower(),
        embedding_model=os.getenv("EMBEDDING_MODEL"),
        passage_store=os.getenv("PASSAGE_STORE", "chroma").lower(),
        chroma_host=os.getenv("CHROMA_HOST"),
        chroma_port=int(os.getenv("CHROMA_PORT", "8000")),
        chroma_persist_dir=os.getenv("CHROMA_PERSIST_DIR", str(ROOT / "data" / "chroma")),
        chroma_collection=os.getenv("CHROMA_COLLECTION", "div_passages"),
        passages_path=os.getenv("PASSAGES_PATH", str(ROOT / "data" / "passages.jsonl")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=int(os.getenv("PORT", "5000")),
        sampling=sampling,
    )
