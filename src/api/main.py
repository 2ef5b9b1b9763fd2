"""
FastAPI application for the chat API.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import Settings, get_settings
from src.orchestrator import ChatAgent

from .deps import build_agent
from .relay import error_response
from .routes import router

logger = logging.getLogger(__name__)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request body"
    first = errors[0]
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def create_app(agent: Optional[ChatAgent] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the app; an injected agent skips construction from settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the agent on startup; drop it on shutdown."""
        if agent is not None:
            app.state.agent = agent
        else:
            app.state.agent = build_agent(settings or get_settings())
        yield
        app.state.agent = None

    app = FastAPI(
        title="DIV-AI Chat API",
        description="Retrieval-augmented Sinhala science tutor with streamed answers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("Rejected %s request: %s", request.url.path, message)
        return error_response(message, status_code=400)

    app.include_router(router)
    return app


app = create_app()
