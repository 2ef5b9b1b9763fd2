"""
Orchestrator: retrieval, prompt construction, and model stream flow.
"""

from .agent import ChatAgent, ChatPipelineError

__all__ = [
    "ChatAgent",
    "ChatPipelineError",
]
