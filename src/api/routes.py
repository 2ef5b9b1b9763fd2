"""
API routes: chat (streamed) and health.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse

from src.orchestrator import ChatPipelineError

from .models import ChatRequest, HealthResponse
from .relay import StreamRelay, error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

relay = StreamRelay()


def _get_agent(request: Request) -> Optional[Any]:
    return getattr(request.app.state, "agent", None)


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    """Health check."""
    return HealthResponse(status="ok", agent_ready=_get_agent(request) is not None)


@router.post("/chat", response_model=None)
async def chat(request: Request, body: ChatRequest) -> StreamingResponse | JSONResponse:
    """Answer the last user turn, streaming model fragments as SSE frames."""
    agent = _get_agent(request)
    if agent is None:
        return error_response("Service unavailable: chat agent not initialized.", status_code=503)
    try:
        fragments = await agent.open_stream(body.conversation())
    except ChatPipelineError as e:
        logger.error("Error in /chat route at stage %s for query %r: %s", e.stage, e.query, e.cause)
        return error_response("Internal Server Error")
    except Exception:
        logger.exception("Error in /chat route")
        return error_response("Internal Server Error")
    return relay.response(fragments)
