"""
Build the chat agent for the API (used in lifespan).
"""

from __future__ import annotations

import logging
from typing import Optional

from src.config import Settings
from src.generation import PromptBuilder
from src.llm import create_client
from src.orchestrator import ChatAgent
from src.rag import RetrievalOrchestrator, create_embedder, create_store

logger = logging.getLogger(__name__)


def build_agent(settings: Settings) -> Optional[ChatAgent]:
    """
    Wire embedder, passage store and completion client into a ChatAgent.

    Returns None (and logs why) when a dependency cannot be constructed, so
    routes can answer 503 instead of the app failing to start.
    """
    try:
        completion_model = create_client(api_key=settings.openai_api_key, base_url=settings.llm_base_url)
        embedder = create_embedder(settings, client=completion_model.client)
        store = create_store(settings)
    except Exception:
        logger.exception("Failed to initialise chat agent")
        return None
    retriever = RetrievalOrchestrator(embedder, store, config=settings.retrieval)
    return ChatAgent(
        retriever=retriever,
        completion_model=completion_model,
        prompt_builder=PromptBuilder(),
        sampling=settings.sampling,
    )
