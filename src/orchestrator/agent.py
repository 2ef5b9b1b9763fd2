"""
Chat agent: retrieval, context assembly, prompt construction, and opening the model stream.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Mapping, Optional, Sequence

from src.generation import PromptBuilder, build_context
from src.generation.prompt_builder import Prompt
from src.llm.client import CompletionModel, SamplingParams
from src.rag.errors import EmbeddingError
from src.rag.hybrid import RetrievalOrchestrator

logger = logging.getLogger(__name__)


class ChatPipelineError(Exception):
    """A fatal step failed before any output was streamed."""

    def __init__(self, stage: str, query: str, cause: BaseException):
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.query = query
        self.cause = cause


class ChatAgent:
    """Turns one conversation into a live fragment stream grounded in retrieved passages."""

    def __init__(
        self,
        retriever: RetrievalOrchestrator,
        completion_model: CompletionModel,
        prompt_builder: Optional[PromptBuilder] = None,
        sampling: Optional[SamplingParams] = None,
    ):
        self.retriever = retriever
        self.completion_model = completion_model
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.sampling = sampling or SamplingParams()

    async def build_prompt(self, conversation: Sequence[Mapping[str, str]]) -> Prompt:
        """
        Retrieve passages for the last (user) turn and render the prompt.

        Raises ChatPipelineError when the query cannot be embedded.
        """
        query = conversation[-1]["content"]
        try:
            results = await self.retriever.retrieve(query)
        except EmbeddingError as e:
            raise ChatPipelineError("embedding", query, e) from e
        except Exception as e:
            raise ChatPipelineError("retrieval", query, e) from e
        context = build_context(results)
        return self.prompt_builder.build(context, query, conversation)

    async def open_stream(self, conversation: Sequence[Mapping[str, str]]) -> AsyncIterator[str]:
        """
        Run the pipeline up to the point where the model stream is open.

        Every failure here happens before the HTTP response is committed, so
        the caller can still answer with a plain error.
        """
        query = conversation[-1]["content"]
        logger.info("User query: %s", query)
        prompt = await self.build_prompt(conversation)
        try:
            return await self.completion_model.stream(prompt.messages(), self.sampling)
        except Exception as e:
            raise ChatPipelineError("completion", query, e) from e
