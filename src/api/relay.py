"""
Relays model fragments to the HTTP client as server-sent-event frames.
"""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator

from fastapi.responses import JSONResponse, StreamingResponse

from .models import ErrorResponse

logger = logging.getLogger(__name__)

# "An error occurred while answering. Please try again."
STREAM_ERROR_NOTICE = "පිළිතුරු ලබා දීමේදී දෝෂයක් ඇති විය. නැවත උත්සාහ කරන්න."

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def format_frame(fragment: str) -> str:
    """One event per fragment; embedded newlines become extra data lines."""
    lines = fragment.split("\n")
    return "".join(f"data: {line}\n" for line in lines) + "\n"


def error_response(message: str, status_code: int = 500) -> JSONResponse:
    """Non-streamed error; only valid before any frame has been sent."""
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


class StreamRelay:
    """Forwards fragments as they arrive and turns a mid-stream failure into a final in-band frame."""

    def __init__(self, error_notice: str = STREAM_ERROR_NOTICE):
        self.error_notice = error_notice

    async def relay(self, fragments: AsyncIterator[str]) -> AsyncIterator[str]:
        count = 0
        try:
            async for fragment in fragments:
                count += 1
                yield format_frame(fragment)
        except asyncio.CancelledError:
            logger.info("Client disconnected after %s fragments", count)
            raise
        except Exception:
            logger.exception("Error during streaming after %s fragments", count)
            yield format_frame(self.error_notice)
        finally:
            aclose = getattr(fragments, "aclose", None)
            if aclose is not None:
                try:
                    await aclose()
                except Exception:
                    logger.warning("Failed to close upstream stream", exc_info=True)

    def response(self, fragments: AsyncIterator[str]) -> StreamingResponse:
        return StreamingResponse(
            self.relay(fragments),
            media_type="text/event-stream",
            headers=SSE_HEADERS,
        )
